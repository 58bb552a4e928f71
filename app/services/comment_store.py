"""
Comment Store - the comments collection in Firestore.

Firestore is the only owner of comment rows. This module exposes the
four operations the rest of the system relies on:
- insert (returns the stored row with server-assigned id/created_at)
- select_all (full snapshot)
- update (upvotes only, fails if the id is absent)
- subscribe_inserts (realtime feed of newly inserted rows)
"""

from firebase_admin import firestore
from google.api_core.exceptions import NotFound
from app.models.comment import Comment, CommentCreate
from typing import Any, Callable, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


UPDATABLE_FIELDS = {"upvotes"}


class CommentStoreError(Exception):
    """The database rejected or failed an operation."""


class CommentNotFoundError(CommentStoreError):
    """No comment exists with the requested id."""


class Subscription:
    """Handle for a realtime listener. unsubscribe() is idempotent."""

    def __init__(self, watch: Any):
        self._watch = watch

    @property
    def active(self) -> bool:
        return self._watch is not None

    def unsubscribe(self) -> None:
        if self._watch is None:
            return
        watch, self._watch = self._watch, None
        try:
            watch.unsubscribe()
        except Exception as e:
            logger.warning(f"⚠️ Failed to close realtime listener cleanly: {e}")


class CommentStore:
    """Service for reading and writing comments."""

    def __init__(self, db: Any, collection: str = "comments"):
        self.db = db
        self.collection_name = collection

    @property
    def collection(self):
        return self.db.collection(self.collection_name)

    def insert(self, comment: CommentCreate) -> Comment:
        """
        Insert a new comment and return it as stored.

        Raises:
            CommentStoreError: if the write or read-back fails
        """
        try:
            doc_ref = self.collection.document()  # Auto-generate unique ID
            data = comment.to_document()
            data["created_at"] = firestore.SERVER_TIMESTAMP
            doc_ref.set(data)

            # Read back so the caller sees the server-assigned timestamp
            snapshot = doc_ref.get()
            stored = snapshot.to_dict() if snapshot.exists else None
            if stored is None:
                raise CommentStoreError(f"Comment {doc_ref.id} was not readable after insert")

            logger.info(f"Comment saved to Firestore: {doc_ref.id}")
            return Comment.from_document(doc_ref.id, stored)

        except CommentStoreError:
            raise
        except Exception as e:
            logger.error(f"Failed to save comment to Firestore: {e}", exc_info=True)
            raise CommentStoreError(f"Insert failed: {e}") from e

    def select_all(self) -> List[Comment]:
        """
        Return every stored comment.

        Raises:
            CommentStoreError: if the query fails
        """
        try:
            return [Comment.from_document(doc.id, doc.to_dict() or {}) for doc in self.collection.stream()]
        except Exception as e:
            logger.error(f"Failed to load comments: {e}")
            raise CommentStoreError(f"Select failed: {e}") from e

    def get(self, comment_id: str) -> Optional[Comment]:
        """Fetch one comment, or None if it does not exist."""
        try:
            snapshot = self.collection.document(comment_id).get()
        except Exception as e:
            raise CommentStoreError(f"Get failed: {e}") from e
        if not snapshot.exists:
            return None
        return Comment.from_document(snapshot.id, snapshot.to_dict() or {})

    def update(self, comment_id: str, fields: Dict[str, Any]) -> None:
        """
        Update mutable fields of an existing comment.

        Only 'upvotes' may change; coordinates, text and theme are immutable.

        Raises:
            ValueError: on an attempt to update any other field
            CommentNotFoundError: if the id does not exist
            CommentStoreError: on any other database failure
        """
        illegal = set(fields) - UPDATABLE_FIELDS
        if illegal:
            raise ValueError(f"Fields cannot be updated: {sorted(illegal)}")

        if "upvotes" in fields and (not isinstance(fields["upvotes"], int) or fields["upvotes"] < 0):
            raise ValueError("upvotes must be a non-negative integer")

        try:
            self.collection.document(comment_id).update(fields)
        except NotFound as e:
            raise CommentNotFoundError(f"Comment {comment_id} not found") from e
        except Exception as e:
            logger.error(f"Failed to update comment {comment_id}: {e}", exc_info=True)
            raise CommentStoreError(f"Update failed: {e}") from e

    def subscribe_inserts(self, callback: Callable[[Comment], None]) -> Subscription:
        """
        Deliver every comment inserted after this call to callback.

        The listener's first snapshot lists rows that already existed and
        is skipped. Delivery includes this process's own inserts and runs
        on the database client's background thread.
        """
        state = {"initial": True}

        def on_snapshot(col_snapshot, changes, read_time):
            if state["initial"]:
                state["initial"] = False
                return
            for change in changes:
                if change.type.name != "ADDED":
                    continue
                doc = change.document
                try:
                    callback(Comment.from_document(doc.id, doc.to_dict() or {}))
                except Exception as e:
                    logger.error(f"Realtime insert handler failed for {doc.id}: {e}", exc_info=True)

        watch = self.collection.on_snapshot(on_snapshot)
        logger.info(f"✅ Subscribed to inserts on '{self.collection_name}'")
        return Subscription(watch)


def get_comment_store() -> CommentStore:
    """Build a CommentStore on the process Firestore client."""
    from app.config.firebase import get_db
    from app.core.settings import settings
    return CommentStore(get_db(), settings.COMMENTS_COLLECTION)
