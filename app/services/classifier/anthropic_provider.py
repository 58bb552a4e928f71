"""
Anthropic Provider - Messages API over HTTP.

Requires ANTHROPIC_API_KEY in environment variables.
"""

from app.services.classifier.base import ClassifierProvider, ClassificationUnavailable, post_json
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class AnthropicClassifierProvider(ClassifierProvider):
    """
    Anthropic Messages API provider.

    Sends the instruction as the system prompt and the comment as the
    single user message.
    """

    DEFAULT_MODEL = "claude-haiku-4-5-20251001"
    API_URL = "https://api.anthropic.com/v1/messages"
    API_VERSION = "2023-06-01"

    def __init__(self, api_key: Optional[str], model: Optional[str] = None, timeout_seconds: float = 10.0):
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.timeout_seconds = timeout_seconds
        self.enabled = bool(api_key and api_key.strip())

        if self.enabled:
            logger.info(f"✅ Anthropic classifier provider initialized: {self.model}")
        else:
            logger.info("⚠️ Anthropic classifier provider disabled: No API key configured")

    def is_enabled(self) -> bool:
        return self.enabled

    def get_model_info(self) -> Dict[str, str]:
        return {"name": self.model, "provider": "anthropic"}

    def complete(self, system_prompt: str, user_text: str, max_tokens: int) -> List[str]:
        if not self.enabled:
            raise ClassificationUnavailable("Anthropic API key not configured")

        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.API_VERSION,
            "content-type": "application/json",
        }
        payload = {
            "model": self.model,
            "max_tokens": max_tokens,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_text}],
        }

        data = post_json(self.API_URL, headers, payload, self.timeout_seconds)

        # Only text blocks carry the label
        return [
            block.get("text", "")
            for block in data.get("content") or []
            if isinstance(block, dict) and block.get("type") == "text"
        ]
