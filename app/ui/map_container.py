"""
Map Container - top-level orchestrator for one client session.

Owns two pieces of state:
- pending_location: the clicked-but-unsaved point (drives the form panel)
- open_comment: the comment shown in the modal
"""

from typing import Any, Optional
import logging

from app.models.comment import Comment
from app.services.comment_store import CommentStore
from app.ui.classify_client import ClassifyClient
from app.ui.comment_modal import CommentModal
from app.ui.map_view import MapAdapter, MapView, MarkerSink, PendingLocation
from app.ui.submission_panel import SubmissionPanel
from app.ui.vote_flags import VoteFlagStore

logger = logging.getLogger(__name__)


class MapContainer:
    """Wires the map, the submission panel and the comment modal together."""

    def __init__(
        self,
        store: CommentStore,
        classify_client: ClassifyClient,
        vote_flags: VoteFlagStore,
        adapter: Optional[MapAdapter],
    ):
        self.store = store
        self.classify_client = classify_client
        self.vote_flags = vote_flags

        self.map_view = MapView(
            store,
            adapter,
            on_location_select=self.select_location,
            on_marker_click=self.open_comment_modal,
        )
        self.marker_sink: MarkerSink = self.map_view

        self.pending_location: Optional[PendingLocation] = None
        self.panel: Optional[SubmissionPanel] = None
        self.modal: Optional[CommentModal] = None
        self._return_focus: Any = None

    @property
    def open_comment(self) -> Optional[Comment]:
        return self.modal.comment if self.modal is not None else None

    def mount(self) -> None:
        self.map_view.mount()

    def unmount(self) -> None:
        self.map_view.unmount()
        self.panel = None
        self.modal = None
        self.pending_location = None

    # ── Submission ────────────────────────────────────────────────────────

    def _set_pending(self, location: Optional[PendingLocation]) -> None:
        self.pending_location = location
        self.map_view.set_pending_location(location)

    def select_location(self, lat: float, lng: float) -> None:
        """A map click starts (or moves) a submission."""
        location = PendingLocation(lat=lat, lng=lng)
        self._set_pending(location)

        panel = SubmissionPanel(
            location,
            self.classify_client,
            self.store,
            on_submit_success=lambda comment: self._handle_submit_success(panel, comment),
            on_close=self.close_panel,
        )
        self.panel = panel

    def _handle_submit_success(self, panel: SubmissionPanel, comment: Comment) -> None:
        self.marker_sink.add_marker(comment)
        # A panel that was closed or replaced meanwhile no longer owns the pending pin
        if panel is self.panel:
            self.panel = None
            self._set_pending(None)
        logger.info(f"✅ Comment {comment.id} submitted ({comment.theme.value})")

    def close_panel(self) -> None:
        self.panel = None
        self._set_pending(None)

    # ── Comment modal ─────────────────────────────────────────────────────

    def open_comment_modal(self, comment: Comment, trigger_handle: Any = None) -> None:
        # Use the freshest cached copy so committed upvotes show up on reopen
        current = self.map_view.get_comment(comment.id) or comment
        self._return_focus = trigger_handle
        self.modal = CommentModal(
            current,
            self.store,
            self.vote_flags,
            on_close=self.close_comment,
            on_upvote_committed=self._handle_upvote_committed,
        )

    def _handle_upvote_committed(self, comment_id: str, upvotes: int) -> None:
        self.map_view.update_upvotes(comment_id, upvotes)

    def close_comment(self) -> None:
        self.modal = None
        handle, self._return_focus = self._return_focus, None
        self.map_view.focus_marker(handle)
