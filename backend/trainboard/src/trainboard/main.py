"""
FastAPI Application Entry Point

Bootstraps logging, the MongoDB connection, middleware, the /api routes and
the single-page application bundle.
"""

import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pymongo.database import Database
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from trainboard import __version__
from trainboard.config import Settings, settings
from trainboard.db.mongo_client import open_database
from trainboard.exceptions import DatabaseConnectionError, FieldError, TrainboardError, ValidationError
from trainboard.routes.api import router as api_router
from trainboard.utils.logger import configure_logging
from trainboard.utils.logging_middleware import RequestLoggingMiddleware
from trainboard.utils.static_files import SPAStaticFiles


# Configure logging early
configure_logging(app_name="trainboard", service="api", env=settings.app_env)


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg: Settings = app.state.settings
    mongo = None
    if app.state.db is None:
        mongo = open_database(cfg)
        app.state.db = mongo.database

    logger.info(f"✔ Trainboard API has started on port: {cfg.port}")
    yield

    if mongo is not None:
        mongo.close()
        app.state.db = None
        logger.info("✔ MongoDB connection closed")


async def handle_trainboard_error(request: Request, exc: TrainboardError) -> JSONResponse:
    ctx_logger = logger.bind(path=request.url.path, error=exc.code)
    if exc.status_code >= 500:
        ctx_logger.error(f"{exc.code}: {exc.message}")
    else:
        ctx_logger.info(f"{exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_database_error(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.bind(path=request.url.path).opt(exception=exc).error("Database error while processing request")
    return await handle_trainboard_error(request, DatabaseConnectionError("Database operation failed"))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Missing or undecodable bodies are reported like any other rejected document
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = "body" if not loc or loc[0] == "body" else ".".join(loc)
        errors.append(FieldError(field, err.get("msg", "Invalid request")))
    return await handle_trainboard_error(request, ValidationError(errors))


HTTP_ERROR_CODES = {404: "not_found", 405: "method_not_allowed"}


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = HTTP_ERROR_CODES.get(exc.status_code, "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": code, "message": str(exc.detail), "details": {}},
        headers=getattr(exc, "headers", None),
    )


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    When ``database`` is given it is used as-is and no connection is opened
    at startup; otherwise the lifespan connects with ``settings.db``.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="trainboard",
        description="Trains, stops and announcements API serving the trainboard web app",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = database

    # Middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Errors
    app.add_exception_handler(TrainboardError, handle_trainboard_error)
    app.add_exception_handler(PyMongoError, handle_database_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)

    # Routers
    app.include_router(api_router, prefix="/api")

    # Static files answer whatever no route matched, after the router has had
    # its chance to send 405s and trailing-slash redirects
    os.makedirs(settings.static_dir, exist_ok=True)
    app.router.default = SPAStaticFiles(directory=settings.static_dir, api_prefix="api")

    return app


app = create_app(settings)


def run() -> None:
    import uvicorn

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
