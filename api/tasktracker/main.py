from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .routes.health import router as health_router
from .routes.tasks import router as tasks_router
from .routes.users import router as users_router
from .services.container import Services, build_services
from .services.errors import TaskTrackerError
from .services.logging import configure_logging
from .services.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    services: Services = app.state.services
    settings = services.settings

    configure_logging(environment=settings.environment, log_level=settings.log_level)

    if settings.create_tables:
        services.db.create_tables()

    logger.info("tasktracker v%s started (timezone=%s)", settings.version, services.clock.tz_name)

    yield

    services.db.dispose()
    logger.info("tasktracker shutdown complete")


async def handle_tasktracker_error(request: Request, exc: TaskTrackerError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_app(settings: Settings | None = None, *, services: Services | None = None) -> FastAPI:
    settings = settings or get_settings()
    services = services or build_services(settings)

    app = FastAPI(title="tasktracker-api", version=settings.version, lifespan=lifespan)
    app.state.services = services

    app.add_exception_handler(TaskTrackerError, handle_tasktracker_error)

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(tasks_router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "tasktracker.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
