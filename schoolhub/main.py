from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .core.config import settings
from .core.cache import cache
from .core.database import close_db_connections
from .core.error_handlers import register_exception_handlers
from .core.logging import setup_logging

from .routers import (
    health, auth, teachers, students, parents, classes, subjects, lessons,
    exams, assignments, results, attendance, events, announcements,
    calendar, documents, stats,
)

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.app_name} API ({settings.environment})")

    if cache.enabled:
        await cache.connect()
        logger.info("Cache initialized")

    yield

    logger.info(f"Shutting down {settings.app_name} API")
    await cache.disconnect()
    await close_db_connections()
    logger.info("Shutdown complete")

app = FastAPI(
    title="SchoolHub API - School Management",
    description="Students, teachers, parents, timetables, assessments and school documents",
    version=settings.app_version,
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

register_exception_handlers(app)

# Include all routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(teachers.router)
app.include_router(students.router)
app.include_router(parents.router)
app.include_router(classes.router)
app.include_router(classes.grades_router)
app.include_router(subjects.router)
app.include_router(lessons.router)
app.include_router(exams.router)
app.include_router(assignments.router)
app.include_router(results.router)
app.include_router(attendance.router)
app.include_router(events.router)
app.include_router(announcements.router)
app.include_router(calendar.router)
app.include_router(calendar.holidays_router)
app.include_router(documents.router)
app.include_router(stats.router)

@app.get("/")
async def root():
    return {
        "message": f"{settings.app_name} API v{settings.app_version}",
        "version": settings.app_version,
        "docs": "/docs",
        "status": "active"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
