"""
Classifier Provider Base Interface.

Defines the contract every language-model provider implements.
Providers only transport text; mapping onto a Theme happens in
ThemeClassifier so every provider gets the same fallback policy.
"""

from abc import ABC, abstractmethod
from typing import Dict, List
import logging

import requests

logger = logging.getLogger(__name__)


class ClassificationUnavailable(Exception):
    """
    The hosted model could not be reached or refused the request.

    Raised for transport, HTTP-status and auth failures. A reply that
    arrives but does not name a theme is NOT an error (see ThemeClassifier).
    """


class ClassifierProvider(ABC):
    """
    Abstract base class for language-model providers.
    """

    @abstractmethod
    def is_enabled(self) -> bool:
        """
        Check if this provider is configured and ready.

        Returns:
            True if provider has what it needs (e.g. an API key)
        """
        pass

    @abstractmethod
    def get_model_info(self) -> Dict[str, str]:
        """
        Get model information.

        Returns:
            Dict with 'name' and 'provider' keys
        """
        pass

    @abstractmethod
    def complete(self, system_prompt: str, user_text: str, max_tokens: int) -> List[str]:
        """
        Request a short completion.

        Args:
            system_prompt: Fixed instruction
            user_text: The resident's comment, sent as the only user content
            max_tokens: Completion budget

        Returns:
            The text segments of the reply, in order (may be empty)

        Raises:
            ClassificationUnavailable: on any transport or API failure
        """
        pass


def post_json(url: str, headers: Dict[str, str], payload: Dict, timeout: float) -> Dict:
    """
    POST a JSON payload and return the decoded JSON reply.

    Every failure mode is raised as ClassificationUnavailable; nothing is retried.
    """
    try:
        response = requests.post(url, headers=headers, json=payload, timeout=timeout)
    except requests.RequestException as e:
        raise ClassificationUnavailable(f"Request to {url} failed: {e}") from e

    if response.status_code != 200:
        raise ClassificationUnavailable(
            f"API returned status {response.status_code}: {response.text[:500]}"
        )

    try:
        return response.json()
    except ValueError as e:
        raise ClassificationUnavailable(f"API returned a non-JSON body: {e}") from e
