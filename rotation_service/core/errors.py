# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain errors raised by the generation engine and its adapters.
Controllers translate these into HTTP status codes.
"""


class BootstrapConflictError(RuntimeError):
    """Initial generation requested for a kind that already has assignments."""

    def __init__(self, kind: str) -> None:
        super().__init__(
            f"Assignments of kind '{kind}' already exist; use rotation instead"
        )
        self.kind = kind


class UpstreamUnavailableError(RuntimeError):
    """A roster provider or assignment store call failed. Safe to retry."""

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(f"{source} unavailable: {detail}")
        self.source = source
        self.detail = detail
