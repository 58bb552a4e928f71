"""
Theme Classifier.

Maps a resident's free-text comment onto one of the eight civic themes.

POLICY:
- A reply that is not exactly one of the labels (ignoring case and
  surrounding whitespace) becomes Theme.OTHER.
- A provider that cannot be reached raises ClassificationUnavailable;
  that is propagated, never replaced by OTHER.
"""

from typing import Optional
import logging

from app.models.comment import Theme
from app.services.classifier.base import ClassifierProvider

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are a civic issue classifier. Given a resident's comment, respond with exactly one of the following theme labels, nothing else, no punctuation, no explanation:

Transportation Safety
Green Space
Housing
Noise & Pollution
Public Safety
Community Services
Infrastructure
Other

Choose the most relevant theme. If nothing fits, respond with: Other"""

DEFAULT_MAX_TOKENS = 16


class ThemeClassifier:
    """
    Classifies comment text with a single provider call.

    Built once at startup and read-only afterwards.
    """

    def __init__(self, provider: ClassifierProvider, max_tokens: int = DEFAULT_MAX_TOKENS):
        self.provider = provider
        self.max_tokens = max_tokens

    def classify(self, text: str) -> Theme:
        """
        Classify a comment.

        Raises:
            ClassificationUnavailable: if the provider call fails
        """
        segments = self.provider.complete(SYSTEM_PROMPT, text, self.max_tokens)
        raw = "".join(segments).strip()

        theme: Optional[Theme] = Theme.match(raw)
        if theme is None:
            logger.info(f"Model reply {raw[:50]!r} is not a known theme, using {Theme.OTHER.value}")
            return Theme.OTHER

        return theme
