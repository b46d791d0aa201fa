# src/todoboard/web/app.py

"""
ASGI application factory.

Wires the tasks router to the store held by AppState, maps not-found errors to
plain-text 404s and enables CORS for browser clients. Any other exception
(corrupt data file, disk failure) is left to FastAPI and becomes a 500.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from ..core.state import AppState
from ..tasks.task_api import NotFoundError
from .endpoints.tasks import create_tasks_router

logger = logging.getLogger(__name__)


async def _not_found_handler(request: Request, exc: Exception) -> PlainTextResponse:
    return PlainTextResponse(str(exc), status_code=404)


def create_app(state: AppState) -> FastAPI:
    settings = state.settings
    app_name = str(getattr(settings, "app_name", "todoboard"))
    origins = list(getattr(settings, "cors_origins", None) or ["*"])

    app = FastAPI(title=app_name)
    app.state.app_state = state

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(NotFoundError, _not_found_handler)

    app.include_router(create_tasks_router(state.task_store))

    @app.get("/health")
    def health():
        return {"status": "ok", "tasks": state.task_store.count_tasks()}

    logger.info("App created name=%s cors=%s", app_name, origins)
    return app
