# job-tracker-backend\src\job_tracker\main.py

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from job_tracker.api.v1 import auth, companies, feedback, job_applications, resumes
from job_tracker.core.config import settings
from job_tracker.core.exceptions import TrackerError
from job_tracker.core.logging_config import configure_logging
from job_tracker.db.checkdb import mask_database_url, verify_database_connection
from job_tracker.db.database import engine
from job_tracker.db.init_db import init_database

configure_logging()
logger = logging.getLogger(__name__)

# Create a FastAPI instance
app = FastAPI(
    title="Job Application Tracker",
    description="Backend API for tracking companies, job applications, resumes and interview feedback",
    version="0.1.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location", "X-Total-Count", "X-Page", "X-Page-Size"],
)


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred"},
    )


@app.on_event("startup")
def on_startup():
    logger.info(f"Starting up with database {mask_database_url(settings.DATABASE_URL)}")
    init_database()


# All endpoints are served under /api/v1/...
app.include_router(auth.router, prefix="/api/v1")
app.include_router(companies.router, prefix="/api/v1")
app.include_router(job_applications.router, prefix="/api/v1")
app.include_router(resumes.router, prefix="/api/v1")
app.include_router(feedback.router, prefix="/api/v1")


# Basic root endpoint
@app.get("/")
async def read_root():
    return RedirectResponse(url="/docs")


@app.get("/health")
def health_check():
    if verify_database_connection(engine):
        return {"status": "healthy", "database": "ok"}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unhealthy", "database": "unreachable"},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
