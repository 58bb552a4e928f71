"""
Comment Modal - detail view of one comment with a one-per-device upvote.

Upvote states: NOT_VOTED -> VOTING -> VOTED, or back to NOT_VOTED with
an error. The count, the voted flag and the persisted flag set change
on entering VOTING and are reverted only if the update fails.

Two devices (or two tabs) voting at the same moment can overwrite each
other's increment: the update writes an absolute count, not a delta.
"""

from enum import Enum
from typing import Callable, Optional
import logging

from app.models.comment import Comment, Theme
from app.services.comment_store import CommentStore
from app.ui.markers import theme_color
from app.ui.vote_flags import VoteFlagStore

logger = logging.getLogger(__name__)


UPVOTE_ERROR = "Could not record your upvote. Please try again."


class UpvoteState(str, Enum):
    NOT_VOTED = "NOT_VOTED"
    VOTING = "VOTING"
    VOTED = "VOTED"


class CommentModal:
    """Controller for an open comment."""

    def __init__(
        self,
        comment: Comment,
        store: CommentStore,
        vote_flags: VoteFlagStore,
        on_close: Optional[Callable[[], None]] = None,
        on_upvote_committed: Optional[Callable[[str, int], None]] = None,
    ):
        self.comment = comment
        self.store = store
        self.vote_flags = vote_flags
        self.on_close = on_close
        self.on_upvote_committed = on_upvote_committed

        self.upvotes = comment.upvotes or 0
        self.error = ""
        self.state = UpvoteState.VOTED if vote_flags.has_voted(comment.id) else UpvoteState.NOT_VOTED

    @property
    def theme(self) -> Theme:
        return self.comment.theme or Theme.OTHER

    @property
    def theme_color(self) -> str:
        return theme_color(self.theme)

    @property
    def has_voted(self) -> bool:
        return self.state in (UpvoteState.VOTING, UpvoteState.VOTED)

    @property
    def can_upvote(self) -> bool:
        return self.state == UpvoteState.NOT_VOTED

    @property
    def upvote_label(self) -> str:
        return f"{self.upvotes} upvote{'' if self.upvotes == 1 else 's'}"

    def upvote(self) -> bool:
        """
        Upvote once from this device. Returns True if the vote was committed.

        No network call is made if the device already voted for this
        comment or a vote is in flight.
        """
        if not self.can_upvote or self.vote_flags.has_voted(self.comment.id):
            return False

        previous = self.upvotes
        new_count = previous + 1

        # Optimistic: applied before the network call, persisted flag included
        self.state = UpvoteState.VOTING
        self.upvotes = new_count
        self.error = ""
        self.vote_flags.add(self.comment.id)

        try:
            self.store.update(self.comment.id, {"upvotes": new_count})
        except Exception as e:
            logger.error(f"❌ Upvote failed for comment {self.comment.id}: {e}")
            self.upvotes = previous
            self.vote_flags.discard(self.comment.id)
            self.state = UpvoteState.NOT_VOTED
            self.error = UPVOTE_ERROR
            return False

        self.state = UpvoteState.VOTED
        if self.on_upvote_committed is not None:
            self.on_upvote_committed(self.comment.id, new_count)
        return True

    def close(self) -> None:
        if self.on_close is not None:
            self.on_close()
