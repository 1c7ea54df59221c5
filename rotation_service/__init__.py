# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Rotation service — prayer and communication assignment engine."""
