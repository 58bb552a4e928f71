"""
Comment endpoints - read-only view of the comments collection.

Writes go through the store directly from the client; this route exists
for tooling and for clients without a database connection.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from app.models.comment import Comment
from app.services.comment_store import CommentStore, CommentStoreError
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["Comments"])


def get_store(request: Request) -> CommentStore:
    """Dependency: the comment store created at startup."""
    store = getattr(request.app.state, "comment_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not initialized. Please check Firebase configuration.",
        )
    return store


@router.get("", response_model=List[Comment])
async def list_comments(store: CommentStore = Depends(get_store)):
    try:
        return await run_in_threadpool(store.select_all)
    except CommentStoreError as e:
        logger.error(f"❌ GET /comments failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to retrieve comments.",
        )
