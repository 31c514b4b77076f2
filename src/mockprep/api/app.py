from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mockprep.api.routes import router as api_router
from mockprep.config import get_settings
from mockprep.db.init import init_database
from mockprep.errors import InvalidResumeError, MockPrepError, NotFoundError, PersistenceError
from mockprep.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _status_for(exc: MockPrepError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, (PersistenceError, InvalidResumeError)):
        return 400
    return 500


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def _startup() -> None:
        result = init_database()
        logger.info("MockPrep ready env=%s tables=%s", settings.app_env, result["tables"])

    @app.exception_handler(MockPrepError)
    async def _mockprep_error(request: Request, exc: MockPrepError) -> JSONResponse:
        status = _status_for(exc)
        if status >= 500:
            logger.error("Unhandled %s on %s: %s", type(exc).__name__, request.url.path, exc)
        return JSONResponse(status_code=status, content={"detail": str(exc)})

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse({"status": "ok", "env": settings.app_env, "scoring": settings.scoring_strategy})

    app.include_router(api_router)
    return app
