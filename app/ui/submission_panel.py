"""
Submission Panel - form for a new comment at a pending location.

States: EDITING -> SUBMITTING -> SUCCESS, or back to EDITING on failure.

A submit attempt makes zero network calls if local validation fails,
otherwise exactly one classify call and, only if that succeeds, exactly
one insert. Entered text survives every failure.
"""

from enum import Enum
from typing import Callable, Optional
import logging
import re

from app.models.comment import COMMENT_MAX_LENGTH, Comment, CommentCreate
from app.services.comment_store import CommentStore
from app.ui.classify_client import ClassifyClient
from app.ui.map_view import PendingLocation

logger = logging.getLogger(__name__)


ZIP_CODE_RE = re.compile(r"^\d{5}$")
ZIP_CODE_MAX_LENGTH = 5

EMPTY_COMMENT_ERROR = "Please enter a comment before submitting."
INVALID_ZIP_ERROR = "Please enter a valid 5-digit ZIP code."
CLASSIFY_ERROR = "Classification failed. Please try again."
SAVE_ERROR = "Failed to save your comment. Please try again."


class SubmissionState(str, Enum):
    EDITING = "EDITING"
    SUBMITTING = "SUBMITTING"
    SUCCESS = "SUCCESS"


class StatusRegion:
    """
    The always-present status line screen readers announce.

    Empty and polite while there is nothing to say; assertive while an
    error is shown.
    """

    def __init__(self):
        self.message = ""

    @property
    def role(self) -> str:
        return "status"

    @property
    def live(self) -> str:
        return "assertive" if self.message else "polite"

    @property
    def visible(self) -> bool:
        return bool(self.message)


class SubmissionPanel:
    """Form controller bound to one pending location."""

    def __init__(
        self,
        location: PendingLocation,
        classify_client: ClassifyClient,
        store: CommentStore,
        on_submit_success: Callable[[Comment], None],
        on_close: Optional[Callable[[], None]] = None,
    ):
        self.location = location
        self.classify_client = classify_client
        self.store = store
        self.on_submit_success = on_submit_success
        self.on_close = on_close

        self.comment_text = ""
        self.zip_code = ""
        self.state = SubmissionState.EDITING
        self.status_region = StatusRegion()

    @property
    def error(self) -> str:
        return self.status_region.message

    @property
    def loading(self) -> bool:
        return self.state == SubmissionState.SUBMITTING

    @property
    def character_count(self) -> str:
        return f"{len(self.comment_text)} / {COMMENT_MAX_LENGTH}"

    # Inputs enforce the same caps as the form's maxlength attributes
    def set_comment_text(self, value: str) -> None:
        self.comment_text = value[:COMMENT_MAX_LENGTH]

    def set_zip_code(self, value: str) -> None:
        self.zip_code = value[:ZIP_CODE_MAX_LENGTH]

    def _fail(self, message: str) -> bool:
        self.status_region.message = message
        self.state = SubmissionState.EDITING
        return False

    def validate(self) -> Optional[str]:
        """Return the first validation error, or None."""
        if not self.comment_text.strip():
            return EMPTY_COMMENT_ERROR
        if not ZIP_CODE_RE.match(self.zip_code.strip()):
            return INVALID_ZIP_ERROR
        return None

    def submit(self) -> bool:
        """
        Run one submit attempt. Returns True on success.
        """
        if self.state != SubmissionState.EDITING:
            return False

        self.status_region.message = ""

        validation_error = self.validate()
        if validation_error:
            return self._fail(validation_error)

        comment_text = self.comment_text.strip()
        zip_code = self.zip_code.strip()
        self.state = SubmissionState.SUBMITTING

        # Step 1: classify
        try:
            theme = self.classify_client.classify(comment_text)
        except Exception as e:
            logger.warning(f"⚠️ Classification request failed: {e}")
            return self._fail(CLASSIFY_ERROR)

        # Step 2: persist
        try:
            saved = self.store.insert(CommentCreate(
                comment_text=comment_text,
                zip_code=zip_code,
                latitude=self.location.lat,
                longitude=self.location.lng,
                theme=theme,
                upvotes=0,
            ))
        except Exception as e:
            logger.error(f"❌ Failed to save comment: {e}")
            return self._fail(SAVE_ERROR)

        self.state = SubmissionState.SUCCESS
        try:
            self.on_submit_success(saved)
        except Exception as e:
            # The comment is saved; only the local follow-up failed
            logger.error(f"❌ Submit success handler failed: {e}", exc_info=True)
        return True

    def cancel(self) -> None:
        if self.on_close is not None:
            self.on_close()
