# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Rotation Service
================
Assigns every active chapter member to one committee member for prayer
support and, separately, for communication outreach. Gender-matched,
load-balanced, rotated month over month, idempotent per period.

Port: 8005
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rotation_service.controllers import generation_controller, system_controller
from rotation_service.core.config import settings
from rotation_service.core.dependencies import get_assignment_store, get_roster
from rotation_service.core.errors import UpstreamUnavailableError
from rotation_service.core.logging import get_logger
from rotation_service.middleware import MetricsMiddleware, RequestIDMiddleware
from rotation_service.repositories.roster_repository import RosterRepository
from rotation_service.repositories.sql_assignment_repository import SqlAssignmentRepository
from rotation_service.schemas import ErrorResponse

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    store = get_assignment_store()
    if isinstance(store, SqlAssignmentRepository):
        try:
            store.ensure_schema()
        except UpstreamUnavailableError as exc:
            logger.error("Database setup FAILED — generation calls will fail: %s", exc)
    roster = get_roster()
    if isinstance(roster, RosterRepository) and settings.SEED_DEFAULT_ROSTER:
        roster.seed_defaults()
        logger.info("Seeded demo roster: members=%d, committee=%d",
                    roster.count_members(), roster.count_committee())
    yield
    logger.info("Shutting down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Rotation Service",
    description="Generates gender-matched prayer and communication assignments.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="internal_server_error",
            detail=str(exc),
            request_id=getattr(request.state, "request_id", None),
        ).model_dump(),
    )


app.include_router(system_controller.router)
app.include_router(generation_controller.router)
