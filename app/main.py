from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.core.exceptions import InvalidReportActionsError
from app.infra.logging_config import LoggingConfig, get_logger
from app.routers import report_actions_router, system

logger = get_logger()


async def invalid_report_actions_handler(
    request: Request, exc: InvalidReportActionsError
) -> JSONResponse:
    logger.warning("Rejected request to %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app(testing: bool = False) -> FastAPI:
    """Build the API application."""
    settings = get_settings()
    LoggingConfig("DEBUG" if testing else None)

    app = FastAPI(title=settings.app_name)
    app.add_exception_handler(InvalidReportActionsError, invalid_report_actions_handler)
    app.include_router(report_actions_router.router)
    app.include_router(system.router)
    return app


app = create_app()
