"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import api_config
from ..database import get_engine, init_db
from ..utils.logging import get_logger, setup_logging
from .routers import products

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: open the catalog database on startup."""
    engine = get_engine()
    await init_db(engine)

    # Store engine in app state for routers
    products._engine = engine
    logger.info("Catalog API started", version=__version__)

    yield

    await engine.dispose()
    logger.info("Catalog API stopped")


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render every HTTP error as `{"error": message}`."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    setup_logging(api_config.log_level)

    app = FastAPI(
        title="Storefront Catalog API",
        description="Product listings and precomputed recommendations per category",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(HTTPException, http_error_handler)

    app.include_router(products.router, prefix="/api/products", tags=["products"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
