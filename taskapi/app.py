"""Application factory for the task API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from taskapi.api.routes import router as tasks_router

logger = logging.getLogger(__name__)


async def _storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Server error", "error": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(title="Task API")
    app.include_router(tasks_router)
    app.add_exception_handler(SQLAlchemyError, _storage_error_handler)
    return app
