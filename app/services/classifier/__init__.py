"""
Theme classification.

A hosted language model labels each comment with one of eight civic
themes. Providers are pluggable; the label policy lives in ThemeClassifier.
"""

from app.services.classifier.base import ClassifierProvider, ClassificationUnavailable
from app.services.classifier.anthropic_provider import AnthropicClassifierProvider
from app.services.classifier.openai_provider import OpenAIClassifierProvider
from app.services.classifier.mock_provider import MockClassifierProvider
from app.services.classifier.theme_classifier import ThemeClassifier, SYSTEM_PROMPT
from app.services.classifier.registry import build_theme_classifier

__all__ = [
    "ClassifierProvider",
    "ClassificationUnavailable",
    "AnthropicClassifierProvider",
    "OpenAIClassifierProvider",
    "MockClassifierProvider",
    "ThemeClassifier",
    "SYSTEM_PROMPT",
    "build_theme_classifier",
]
