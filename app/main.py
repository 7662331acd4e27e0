# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.database import create_db_and_tables
from app.schemas.common import ErrorResponse

# Import models so SQLModel metadata is populated before create_all()
from app.models import product as _product_models  # noqa: F401
from app.models import document as _document_models  # noqa: F401
from app.models import notice as _notice_models  # noqa: F401
from app.models import site_content as _site_content_models  # noqa: F401
from app.models import activity as _activity_models  # noqa: F401

# Routers
from app.routers.products import router as products_router
from app.routers.documents import router as documents_router
from app.routers.notices import router as notices_router
from app.routers.uploads import router as uploads_router
from app.routers.activity import router as activity_router
from app.routers.site_content import routers as site_content_routers

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
    """
    logger.info("🔄 Startup: Connecting to database...")
    try:
        create_db_and_tables()
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"❌ Startup: DB connection FAILED: {e}")
        raise
    yield


def format_validation_errors(errors) -> str:
    """
    Flatten pydantic errors into one readable message:
        "title: field cannot be empty; priority: Input should be 'low', ..."
    """
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "form")]
        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Error envelope: {"success": false, "error": "..."} ---

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = format_validation_errors(exc.errors())
        logger.info(f"{request.method} {request.url.path} rejected: {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error=message).model_dump(),
        )

    # API prefix, e.g. /api/products
    app.include_router(products_router, prefix=settings.API_PREFIX)
    app.include_router(documents_router, prefix=settings.API_PREFIX)
    app.include_router(notices_router, prefix=settings.API_PREFIX)
    app.include_router(uploads_router, prefix=settings.API_PREFIX)
    app.include_router(activity_router, prefix=settings.API_PREFIX)
    for router in site_content_routers:
        app.include_router(router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "vargo-agro-content"}

    return app


app = create_app()
