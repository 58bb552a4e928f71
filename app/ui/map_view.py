"""
Map View - keeps the on-map markers in sync with the comment store.

Marker synchronization:
- mount: subscribe to inserts, then render one marker per stored row.
  A failed snapshot is logged and the map stays empty.
- local insert (add_marker): the row this client just saved.
- remote insert (realtime feed): rows saved by anyone, including echoes
  of this client's own inserts.

Both paths go through _render_once, which records the id and creates
the marker under one lock, so each comment gets exactly one marker no
matter which path sees it first. The realtime callback runs on the
database client's thread, hence the lock.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Set
import logging
import threading

from app.models.comment import Comment
from app.services.comment_store import CommentStore, Subscription
from app.ui.markers import build_marker_spec, MarkerSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingLocation:
    """A clicked map point that has no saved comment yet."""
    lat: float
    lng: float


class MarkerSink(ABC):
    """Command channel the container uses to push a freshly saved comment."""

    @abstractmethod
    def add_marker(self, comment: Comment) -> None:
        pass


class MapAdapter(ABC):
    """
    Concrete map renderer.

    Handles returned by add_marker/add_pending_marker are opaque to the view.
    """

    @abstractmethod
    def add_marker(self, spec: MarkerSpec) -> Any:
        pass

    @abstractmethod
    def add_pending_marker(self, lat: float, lng: float) -> Any:
        pass

    @abstractmethod
    def remove_marker(self, handle: Any) -> None:
        pass

    @abstractmethod
    def focus_marker(self, handle: Any) -> None:
        pass

    @abstractmethod
    def remove(self) -> None:
        """Release the map and everything on it."""
        pass


class MapView(MarkerSink):
    """
    Event-driven map controller for one client session.
    """

    def __init__(
        self,
        store: CommentStore,
        adapter: Optional[MapAdapter],
        on_location_select: Optional[Callable[[float, float], None]] = None,
        on_marker_click: Optional[Callable[[Comment, Any], None]] = None,
    ):
        self.store = store
        self.adapter = adapter
        self.on_location_select = on_location_select
        self.on_marker_click = on_marker_click

        self._lock = threading.Lock()
        self._rendered_ids: Set[str] = set()
        self._markers: Dict[str, Any] = {}
        self._comments: Dict[str, Comment] = {}
        self._pending_handle: Any = None
        self._subscription: Optional[Subscription] = None
        self.mounted = False

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def mount(self, live: bool = True) -> None:
        """
        Load existing comments and, if live, start the realtime feed.

        Without an adapter (no map token) the view stays non-functional.
        """
        if self.mounted:
            return
        if self.adapter is None:
            logger.error("[Map] No map adapter available, map will not render")
            return

        self.mounted = True

        # Subscribe first: anything inserted while the snapshot loads still arrives
        if live:
            try:
                self._subscription = self.store.subscribe_inserts(self._on_remote_insert)
            except Exception as e:
                logger.error(f"[Map] Failed to subscribe to new comments: {e}")

        try:
            comments = self.store.select_all()
        except Exception as e:
            logger.error(f"[Map] Failed to load comments: {e}")
            return

        for comment in comments:
            self._render_once(comment)
        logger.info(f"[Map] Rendered {len(self._markers)} comment marker(s)")

    def unmount(self) -> None:
        """Release the realtime listener and the map. Safe to call twice."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

        if self.adapter is not None and self.mounted:
            self.adapter.remove()

        with self._lock:
            self._markers.clear()
            self._comments.clear()
            self._rendered_ids.clear()
            self._pending_handle = None
        self.mounted = False

    # ── Markers ───────────────────────────────────────────────────────────

    def add_marker(self, comment: Comment) -> None:
        """Render a comment this client just saved."""
        if not self.mounted:
            return
        self._render_once(comment)

    def _on_remote_insert(self, comment: Comment) -> None:
        if not self.mounted:
            return
        if not self._render_once(comment):
            logger.debug(f"[Map] Ignoring duplicate insert event for {comment.id}")

    def _render_once(self, comment: Comment) -> bool:
        """Create the marker unless this id was already rendered."""
        with self._lock:
            if comment.id in self._rendered_ids:
                return False
            handle = self.adapter.add_marker(build_marker_spec(comment))
            self._rendered_ids.add(comment.id)
            self._comments[comment.id] = comment
            self._markers[comment.id] = handle
            return True

    def marker_count(self) -> int:
        with self._lock:
            return len(self._markers)

    def get_comment(self, comment_id: str) -> Optional[Comment]:
        with self._lock:
            return self._comments.get(comment_id)

    def update_upvotes(self, comment_id: str, upvotes: int) -> None:
        """Keep the cached copy in sync after a committed upvote."""
        with self._lock:
            comment = self._comments.get(comment_id)
            if comment is not None:
                self._comments[comment_id] = comment.model_copy(update={"upvotes": upvotes})

    def focus_marker(self, handle: Any) -> None:
        if self.adapter is not None and handle is not None and self.mounted:
            self.adapter.focus_marker(handle)

    # ── Pending marker ────────────────────────────────────────────────────

    def set_pending_location(self, location: Optional[PendingLocation]) -> None:
        """Show the in-progress pin; at most one exists at a time."""
        if not self.mounted:
            return
        with self._lock:
            if self._pending_handle is not None:
                self.adapter.remove_marker(self._pending_handle)
                self._pending_handle = None
            if location is not None:
                self._pending_handle = self.adapter.add_pending_marker(location.lat, location.lng)

    @property
    def has_pending_marker(self) -> bool:
        return self._pending_handle is not None

    # ── Input events ──────────────────────────────────────────────────────

    def handle_map_click(self, lat: float, lng: float) -> None:
        if self.mounted and self.on_location_select is not None:
            self.on_location_select(lat, lng)

    def handle_marker_click(self, comment_id: str) -> None:
        with self._lock:
            comment = self._comments.get(comment_id)
            handle = self._markers.get(comment_id)
        if comment is None:
            logger.warning(f"[Map] Click on unknown marker {comment_id}")
            return
        if self.on_marker_click is not None:
            self.on_marker_click(comment, handle)
