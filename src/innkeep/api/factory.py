"""FastAPI application factory with role-based route mounting."""

import os
from typing import Literal

from fastapi import FastAPI, Request, Response

from innkeep.observability.correlation import CORRELATION_ID_HEADER, correlation_scope
from innkeep.observability.logging import configure_logging

from .routers import public, worker

AppRole = Literal["public", "worker"]


def create_app(role: AppRole | None = None) -> FastAPI:
    """Create the app for a role.

    Args:
        role: "worker" additionally mounts the scheduled task routes.
              If None, reads APP_ROLE (default "public").

    Returns:
        Configured FastAPI application.
    """
    if role is None:
        role = os.environ.get("APP_ROLE", "public")  # type: ignore[assignment]

    configure_logging()

    app = FastAPI(
        title="Innkeep",
        docs_url=None,
        redoc_url=None,
    )

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_ID_HEADER)) as cid:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response

    # Public routes are always mounted; tasks only on the worker
    app.include_router(public.router)
    if role == "worker":
        app.include_router(worker.router)

    return app
