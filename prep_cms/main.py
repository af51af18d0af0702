# main.py
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prep_cms.config import build_sqlalchemy_db_url, settings
from prep_cms.database import Base, engine
from prep_cms.errors import FormValidationError, NotFoundError, QueryError
from prep_cms.models import ClientPreferencesModel, Subject, Subtopic, Topic  # noqa: F401  # register tables
from prep_cms.routers import admin, health, navigation, preferences, subjects, subtopics, topics
from prep_cms.routers.dependencies import REVALIDATE_HEADER


logging.basicConfig(
    level=getattr(logging, (settings.log_level or "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def _register_error_handlers(application: FastAPI) -> None:
    @application.exception_handler(FormValidationError)
    async def form_validation_handler(request: Request, exc: FormValidationError):
        return JSONResponse(status_code=422, content={"error": exc.field_errors})

    @application.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @application.exception_handler(QueryError)
    async def query_error_handler(request: Request, exc: QueryError):
        # Database detail was logged where the error was raised; only the safe message leaves.
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Global unhandled exception: %s", exc, exc_info=True)
        return JSONResponse(status_code=500, content={"detail": "An internal server error occurred."})


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Shared databases are migrated explicitly (scripts/create_tables.py);
        # a local sqlite file is created on demand.
        if build_sqlalchemy_db_url(settings).startswith("sqlite"):
            Base.metadata.create_all(bind=engine)
        logger.info("%s %s started (environment=%s)", settings.app_name, settings.version, settings.environment)
        yield

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REVALIDATE_HEADER],
    )
    _register_error_handlers(application)

    # Health endpoints (do not depend on API_PREFIX)
    application.include_router(health.router)

    application.include_router(subjects.router, prefix=settings.api_prefix)
    application.include_router(topics.router, prefix=settings.api_prefix)
    application.include_router(subtopics.router, prefix=settings.api_prefix)
    application.include_router(admin.router, prefix=settings.api_prefix)
    application.include_router(navigation.router, prefix=settings.api_prefix)
    application.include_router(preferences.router, prefix=settings.api_prefix)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("prep_cms.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
