from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from users_api.core.config import get_settings
from users_api.core.errors import UserApiError
from users_api.core.log import configure_logging
from users_api.db.create_tables import create_all
from users_api.routers import users as users_router
from users_api.services.user_service import UserService

logger = logging.getLogger("users_api.app")


def _error_response(code: str, message: str, status_code: int, details: Optional[list] = None) -> JSONResponse:
    payload = {"ok": False, "error": code, "message": message}
    if details is not None:
        payload["details"] = details
    return JSONResponse(payload, status_code=status_code)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if get_settings().auto_create_tables:
        create_all()
        logger.info("Database tables ensured")
    yield


def create_app(user_service: Optional[UserService] = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (`--factory`)."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Users API",
        lifespan=lifespan,
        docs_url=None if settings.app_env == "prod" else "/docs",
        redoc_url=None if settings.app_env == "prod" else "/redoc",
    )
    app.state.user_service = user_service or UserService()
    app.include_router(users_router.router)

    @app.exception_handler(UserApiError)
    async def handle_user_api_error(_: Request, exc: UserApiError):
        return _error_response(exc.code, exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(_: Request, exc: RequestValidationError):
        return _error_response(
            "invalid",
            "Request body or parameters are invalid.",
            422,
            details=jsonable_encoder(exc.errors()),
        )

    return app


app = create_app()
