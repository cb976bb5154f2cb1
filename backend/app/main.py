# backend/app/main.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import uvicorn
import logging

from academic_core.exceptions import AcademicCoreError

from .api.v1.api import api_router
from .config import get_settings, validate_settings
from .core.exceptions import AppError
from .database import check_db_health, db_manager, init_db
from .logging_config import build_logging_config, new_request_id, request_id_var

# Get a logger for this specific module
logger = logging.getLogger(__name__)

# Load application settings from the configuration file/environment
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    logger.info("Starting up the application...")
    for issue in validate_settings(settings):
        logger.warning(f"Configuration issue: {issue}")

    if not db_manager.is_initialized:
        try:
            options = settings.database_config
            await init_db(
                database_url=settings.DATABASE_URL,
                create_tables=settings.DATABASE_CREATE_TABLES,
                **options,
            )
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}", exc_info=True)
            raise

    yield

    logger.info("Shutting down the application...")
    await db_manager.close()


app = FastAPI(
    title=settings.APP_NAME,
    description="School records with conflict-checked scheduling and grade aggregation",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Tag every log line of a request with one id and echo it back."""
    request_id = request.headers.get("X-Request-ID") or new_request_id()
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    log = logger.error if exc.status_code >= 500 else logger.info
    log(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(AcademicCoreError)
async def academic_core_error_handler(request: Request, exc: AcademicCoreError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch any unhandled exceptions and log them with a full traceback.
    Returns a generic 500 error to the client to avoid leaking details.
    """
    logger.error(
        f"Unhandled exception for request {request.method} {request.url}: {exc}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal server error occurred."},
    )


# Include API routes from the v1 api module
app.include_router(api_router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint providing basic API information."""
    return {
        "message": f"Welcome to the {settings.APP_NAME}",
        "school": settings.SCHOOL_NAME,
        "version": settings.APP_VERSION,
        "status": "active",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint to verify service and database connectivity."""
    db_health = await check_db_health()
    return {
        "status": "healthy" if db_health["status"] == "healthy" else "unhealthy",
        "service": "backend",
        "database": db_health,
    }


if __name__ == "__main__":
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_config=build_logging_config(settings.LOG_LEVEL),
    )
