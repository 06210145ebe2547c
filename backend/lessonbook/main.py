"""Lessonbook: FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from lessonbook.config import settings
from lessonbook.database import init_db
from lessonbook.middleware.error_handlers import register_error_handlers
from lessonbook.middleware.rate_limit import limiter
from lessonbook.routers import lessons, students, teachers

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create all tables on startup
init_db()

# ── CORS origins from env ───────────────────────────────────────────────────
_cors_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]

app = FastAPI(
    title="Lessonbook",
    description="Music lesson scheduling between teachers and students.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Domain errors -> 400 / 404
register_error_handlers(app)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(teachers.router)
app.include_router(students.router)
app.include_router(lessons.router)


@app.get("/")
def root():
    return {
        "name": "Lessonbook API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "ok"}
