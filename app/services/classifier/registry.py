"""
Classifier Provider Registry.

Selects the configured provider once at startup. There is no fallback
chain: if the selected provider is not usable, startup fails.
"""

from app.services.classifier.anthropic_provider import AnthropicClassifierProvider
from app.services.classifier.base import ClassifierProvider
from app.services.classifier.mock_provider import MockClassifierProvider
from app.services.classifier.openai_provider import OpenAIClassifierProvider
from app.services.classifier.theme_classifier import ThemeClassifier
import logging

logger = logging.getLogger(__name__)


SUPPORTED_PROVIDERS = ("anthropic", "openai", "mock")


def build_provider(settings) -> ClassifierProvider:
    """
    Construct the provider named by settings.AI_PROVIDER.

    Raises:
        RuntimeError: unknown provider name or missing API key
    """
    name = (settings.AI_PROVIDER or "").strip().lower()

    if name == "anthropic":
        provider = AnthropicClassifierProvider(
            api_key=settings.ANTHROPIC_API_KEY,
            model=settings.AI_MODEL,
            timeout_seconds=settings.AI_TIMEOUT_SECONDS,
        )
        if not provider.is_enabled():
            raise RuntimeError("Missing environment variable: ANTHROPIC_API_KEY must be set.")
        return provider

    if name == "openai":
        provider = OpenAIClassifierProvider(
            api_key=settings.OPENAI_API_KEY,
            model=settings.AI_MODEL,
            timeout_seconds=settings.AI_TIMEOUT_SECONDS,
        )
        if not provider.is_enabled():
            raise RuntimeError("Missing environment variable: OPENAI_API_KEY must be set.")
        return provider

    if name == "mock":
        logger.warning("⚠️ Using mock classifier provider (AI_PROVIDER=mock)")
        return MockClassifierProvider()

    raise RuntimeError(
        f"Unknown AI_PROVIDER '{settings.AI_PROVIDER}'. Expected one of: {', '.join(SUPPORTED_PROVIDERS)}"
    )


def build_theme_classifier(settings) -> ThemeClassifier:
    """Build the process-wide ThemeClassifier from settings."""
    provider = build_provider(settings)
    logger.info(f"✅ Theme classifier ready using {provider.get_model_info()['name']}")
    return ThemeClassifier(provider, max_tokens=settings.AI_MAX_TOKENS)
