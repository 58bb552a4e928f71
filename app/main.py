"""
Civic Pulse Map - FastAPI Application Entry Point

Residents drop a pin, describe a local issue and give a ZIP code; a
language model files the comment under one of eight civic themes and
the comment appears on everyone's map.

DESIGN PRINCIPLES:
- The model only picks a theme; it never edits or rejects a comment
- Firestore is the single source of truth for comments
- Configuration is read once at startup and passed to services
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.settings import settings
from app.config.firebase import initialize_firestore
from app.services.classifier import build_theme_classifier
from app.services.comment_store import CommentStore
from app.routes import classify, comments, health, map

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Crowdsourced civic issue map with AI theme classification",
    debug=settings.DEBUG,
)


# Global exception handler to catch ALL exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unhandled exceptions with full traceback; never leak details to clients."""
    logger.error(
        f"🔥 Unhandled exception on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Application lifecycle events
@app.on_event("startup")
async def startup_event():
    """
    Initialize services on application startup.

    Missing database or model credentials stop the process here.
    A missing map token only disables the map page.
    """
    print(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    db = initialize_firestore()
    app.state.comment_store = CommentStore(db, settings.COMMENTS_COLLECTION)

    app.state.theme_classifier = build_theme_classifier(settings)

    if not settings.MAPBOX_TOKEN:
        logger.warning("⚠️ MAPBOX_TOKEN not set, /map will be unavailable")


@app.on_event("shutdown")
async def shutdown_event():
    """
    Cleanup on application shutdown.
    """
    print(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(classify.router)
app.include_router(comments.router)
app.include_router(map.router)


# Root endpoint
@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "classify": "POST /api/classify",
        "map": "/map",
    }
