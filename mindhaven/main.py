"""mindhaven FastAPI application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mindhaven.api import admin, auth, forum, health, moods, quotes, resources
from mindhaven.core.config import settings
from mindhaven.core.errors import AppError, ValidationError

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
)

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(exc: AppError) -> JSONResponse:
    content: dict = {"detail": exc.detail}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies get the same 400 body as service validation errors."""
    return _error_response(ValidationError.from_pydantic(exc))


app.include_router(health.router)
app.include_router(auth.router)
app.include_router(moods.router)
app.include_router(resources.router)
app.include_router(forum.router)
app.include_router(admin.router)
app.include_router(quotes.router)
