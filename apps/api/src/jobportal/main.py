"""
Job Portal API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- The process-wide verification code store
- Database and (optional) Redis connections
- Background job scheduler
- CORS middleware
- API routing and static serving of uploaded documents
- Health check endpoint
"""

from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from jobportal.api import api_router
from jobportal.core.config import settings
from jobportal.core.database import close_db, init_db
from jobportal.core.redis import close_redis, init_redis
from jobportal.core.scheduler import start_scheduler, stop_scheduler
from jobportal.modules.verification import CodeStore, register_verification_jobs


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events including:
    - Verification code store (lives exactly as long as the app)
    - Redis connection (rate limiting falls back to memory without it)
    - Database connection
    - Background job scheduler
    """
    # Startup
    print(f"Starting Job Portal API in {settings.python_env} mode...")

    code_store = CodeStore(ttl=timedelta(minutes=settings.otp_ttl_minutes))
    app.state.code_store = code_store
    print(f"[OK] Verification code store ready (ttl: {settings.otp_ttl_minutes} minutes)")

    # Initialize Redis
    try:
        await init_redis()
        print("[OK] Redis connected")
    except Exception as e:
        print(f"[FAIL] Redis connection failed, using in-memory rate limits: {e}")

    # Initialize Database
    try:
        await init_db()
        print("[OK] Database connected")
    except Exception as e:
        print(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    # Initialize Background Job Scheduler
    try:
        register_verification_jobs(code_store)
        await start_scheduler()
        print("[OK] Background scheduler started")
    except Exception as e:
        print(f"[FAIL] Background scheduler failed to start: {e}")
        if settings.is_production:
            raise

    yield  # Application runs here

    # Shutdown
    print("Shutting down Job Portal API...")

    # Stop the scheduler first (wait for running jobs)
    await stop_scheduler()
    print("[OK] Background scheduler stopped")

    await close_redis()
    await close_db()
    print("[OK] Cleanup complete")


app = FastAPI(
    title="Job Portal API",
    description="Job application portal: email-verified signup, application editing and submission",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api/v1")

# Uploaded documents are served read-only from the uploads directory
settings.uploads_dir.mkdir(parents=True, exist_ok=True)
app.mount(
    settings.uploads_url_prefix,
    StaticFiles(directory=settings.uploads_dir),
    name="uploads",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to the Job Portal API",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint. Fails with 503 when the database is unreachable."""
    try:
        await init_db()
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "unhealthy", "database": "unreachable"},
        ) from e
    return {"status": "healthy", "database": "connected"}
