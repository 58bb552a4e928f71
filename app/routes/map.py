"""Map routes - server-rendered map of every stored comment.

The page is a snapshot: the map view is mounted without a realtime
listener, rendered once, and torn down.
"""

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, PlainTextResponse
from app.core.settings import settings
from app.routes.comments import get_store
from app.services.comment_store import CommentStore
from app.ui.folium_map import create_map_adapter
from app.ui.map_view import MapView
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/map", tags=["Map"])


def render_map_snapshot(store: CommentStore, token: str) -> str:
    adapter = create_map_adapter(token)
    view = MapView(store, adapter)
    view.mount(live=False)
    try:
        return adapter.render()
    finally:
        view.unmount()


@router.get("", response_class=HTMLResponse)
async def map_page(store: CommentStore = Depends(get_store)):
    """
    Render all comments as markers on the base map.

    Returns 503 when no MAPBOX_TOKEN is configured.
    """
    if not settings.MAPBOX_TOKEN:
        logger.error("[Map] Missing MAPBOX_TOKEN")
        return PlainTextResponse(
            "Map unavailable: MAPBOX_TOKEN is not configured.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    html = await run_in_threadpool(render_map_snapshot, store, settings.MAPBOX_TOKEN)
    return HTMLResponse(html)
