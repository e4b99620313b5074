import asyncio
from contextlib import asynccontextmanager, suppress
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from classboard.api.routes import activity, auth, board, conflicts, health, registry, timetable
from classboard.core.config import get_settings
from classboard.core.exceptions import AppError
from classboard.db.bootstrap import ensure_runtime_schema
from classboard.services.bell import BellScheduler, run_bell_loop
from classboard.services.broadcast_hub import broadcast_hub
from classboard.services.locator import school_now

settings = get_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_runtime_schema()
    bell_task: asyncio.Task | None = None
    if settings.bell_enabled:
        scheduler = BellScheduler(short_ms=settings.bell_short_ms, long_ms=settings.bell_long_ms)
        bell_task = asyncio.create_task(
            run_bell_loop(
                scheduler,
                broadcast_hub,
                clock=lambda: school_now(settings.school_timezone),
                interval_seconds=settings.bell_interval_seconds,
            )
        )
        logger.info("Bell loop started (%s)", settings.school_timezone)
    yield
    if bell_task is not None:
        bell_task.cancel()
        with suppress(asyncio.CancelledError):
            await bell_task


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )

app = FastAPI(title=settings.project_name, lifespan=lifespan)
app.add_exception_handler(AppError, app_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(auth.router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])
app.include_router(timetable.router, prefix=f"{settings.api_prefix}/timetable", tags=["timetable"])
app.include_router(registry.router, prefix=f"{settings.api_prefix}/registry", tags=["registry"])
app.include_router(board.router, prefix=f"{settings.api_prefix}/board", tags=["board"])
app.include_router(conflicts.router, prefix=f"{settings.api_prefix}/conflicts", tags=["conflicts"])
app.include_router(activity.router, prefix=settings.api_prefix, tags=["activity"])
