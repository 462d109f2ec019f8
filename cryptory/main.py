"""Main FastAPI application."""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from cryptory.api.routes import admin, coins
from cryptory.core.database import init_db, SessionLocal
from cryptory.core.config import get_settings
from cryptory.core.exceptions import CryptoryError
from cryptory.core.logging_config import setup_logging

# Configure logging
setup_logging()
logger = logging.getLogger(__name__)

settings = get_settings()

# Create FastAPI app
# Swagger/ReDoc는 enable_docs 설정에 따라 활성화/비활성화
app = FastAPI(
    title="Cryptory Coin Service",
    description="Coin catalog, live prices, news and chart issues",
    version="0.1.0",
    docs_url="/docs" if settings.enable_docs else None,
    redoc_url="/redoc" if settings.enable_docs else None,
    openapi_url="/openapi.json" if settings.enable_docs else None
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(coins.router)
app.include_router(admin.router)


@app.exception_handler(CryptoryError)
async def cryptory_exception_handler(request: Request, exc: CryptoryError):
    """Render service errors with their HTTP-equivalent status."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc} {exc.context}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


@app.on_event("startup")
async def startup_event():
    """Initialize database and optionally seed the catalog on startup."""
    logger.info("Starting application...")
    init_db()

    if settings.bootstrap_on_startup:
        from cryptory.services.coin_sync import run_initial_load

        db = SessionLocal()
        try:
            run_initial_load(db)
        except CryptoryError as e:
            logger.error(f"Initial data load failed: {e}")
        finally:
            db.close()

    logger.info("Application started successfully")


@app.get("/api")
async def api_root():
    """API root endpoint."""
    return {
        "message": "Cryptory Coin Service API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
