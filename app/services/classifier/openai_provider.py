"""
OpenAI Provider - chat completions over HTTP.

Requires OPENAI_API_KEY in environment variables.
"""

from app.services.classifier.base import ClassifierProvider, ClassificationUnavailable, post_json
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class OpenAIClassifierProvider(ClassifierProvider):
    """OpenAI chat completions provider."""

    DEFAULT_MODEL = "gpt-4o-mini"
    API_URL = "https://api.openai.com/v1/chat/completions"

    def __init__(self, api_key: Optional[str], model: Optional[str] = None, timeout_seconds: float = 10.0):
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.timeout_seconds = timeout_seconds
        self.enabled = bool(api_key and api_key.strip())

        if self.enabled:
            logger.info(f"✅ OpenAI classifier provider initialized: {self.model}")
        else:
            logger.info("⚠️ OpenAI classifier provider disabled: No API key configured")

    def is_enabled(self) -> bool:
        return self.enabled

    def get_model_info(self) -> Dict[str, str]:
        return {"name": self.model, "provider": "openai"}

    def complete(self, system_prompt: str, user_text: str, max_tokens: int) -> List[str]:
        if not self.enabled:
            raise ClassificationUnavailable("OpenAI API key not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_text},
            ],
            "temperature": 0,
            "max_tokens": max_tokens,
        }

        data = post_json(self.API_URL, headers, payload, self.timeout_seconds)

        segments = []
        for choice in data.get("choices") or []:
            content = (choice.get("message") or {}).get("content")
            if content:
                segments.append(content)
        return segments
