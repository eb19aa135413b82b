"""
Application entry point.

``create_app`` builds the FastAPI app around one explicitly constructed
``Database`` and ``LinkChecker``, both kept on ``app.state`` and handed to
the handlers through dependencies. ``run`` serves it with uvicorn.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import api_router
from .config import Settings
from .db import Database
from .link_check import LinkChecker
from . import models  # noqa: F401  registers the tables on Base.metadata


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body for %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(settings: Optional[Settings] = None, link_checker: Optional[LinkChecker] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    database = Database(settings.database_url)
    database.create_all()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        database.dispose()

    app = FastAPI(title="Bookmark Organizer", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.link_checker = link_checker or LinkChecker(timeout=settings.link_check_timeout)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok"}

    app.include_router(api_router, prefix=settings.api_prefix)
    logger.info("Bookmark API ready (database: %s)", database.url.render_as_string(hide_password=True))
    return app


def run():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
