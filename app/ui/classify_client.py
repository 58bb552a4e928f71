"""
HTTP client for POST /api/classify, used by the submission panel.
"""

from app.models.comment import Theme
import logging
import requests

logger = logging.getLogger(__name__)


class ClassificationRequestError(Exception):
    """
    The classify endpoint did not return a theme.

    status_code is None for transport failures. is_rejected is True for
    4xx (the request itself was bad); everything else is a service
    failure worth retrying later.
    """

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_rejected(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


class ClassifyClient:
    """Calls the classification endpoint once per request, no retries."""

    def __init__(self, base_url: str, timeout: float = 15.0, session=None):
        self.url = base_url.rstrip("/") + "/api/classify"
        self.timeout = timeout
        self.session = session or requests.Session()

    def classify(self, comment_text: str) -> Theme:
        try:
            response = self.session.post(self.url, json={"comment_text": comment_text}, timeout=self.timeout)
        except requests.RequestException as e:
            raise ClassificationRequestError(f"Classify request failed: {e}") from e

        if not response.ok:
            try:
                message = response.json().get("error") or response.reason
            except ValueError:
                message = response.reason
            raise ClassificationRequestError(str(message), status_code=response.status_code)

        try:
            theme = response.json().get("theme")
        except ValueError as e:
            raise ClassificationRequestError("Classify response was not JSON", status_code=response.status_code) from e

        return Theme.from_label(theme)
