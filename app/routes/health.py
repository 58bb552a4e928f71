"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from app.core.settings import settings
from app.routes.comments import get_store
from app.services.comment_store import CommentStore
from datetime import datetime, timezone


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check(request: Request):
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    classifier = getattr(request.app.state, "theme_classifier", None)
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "classifier": classifier.provider.get_model_info() if classifier else None,
        "map_enabled": bool(settings.MAPBOX_TOKEN),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/db")
async def database_health(store: CommentStore = Depends(get_store)):
    """
    Database connectivity check.
    Counts stored comments, which exercises a full read.
    """
    try:
        comments = await run_in_threadpool(store.select_all)
        return {
            "status": "healthy",
            "database": "firestore",
            "connected": True,
            "comments_count": len(comments),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail=f"Database connection failed: {str(e)}",
        )
