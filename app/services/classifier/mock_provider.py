"""
Mock Classifier Provider - offline keyword rules.

Only used when AI_PROVIDER=mock is configured explicitly (local
development, demos without an API key). It is never a fallback for a
failing real provider.
"""

from app.services.classifier.base import ClassifierProvider
from typing import Dict, List
import logging

logger = logging.getLogger(__name__)


# First matching rule wins
KEYWORD_RULES = [
    ("Transportation Safety", ["crosswalk", "speeding", "traffic", "bike lane", "intersection", "pedestrian", "bus stop"]),
    ("Green Space", ["park", "tree", "garden", "playground", "trail"]),
    ("Housing", ["rent", "housing", "eviction", "apartment", "landlord", "homeless"]),
    ("Noise & Pollution", ["noise", "loud", "smell", "smoke", "pollution", "litter", "dumping"]),
    ("Public Safety", ["crime", "theft", "unsafe", "break-in", "vandalism", "assault"]),
    ("Community Services", ["library", "community center", "senior", "youth", "clinic", "school"]),
    ("Infrastructure", ["pothole", "sidewalk", "streetlight", "street light", "drain", "pipe", "road", "bridge"]),
]


class MockClassifierProvider(ClassifierProvider):
    """
    Rule-based provider that replies with a label like a real model would.
    """

    MODEL_NAME = "mock-keywords-v1"

    def __init__(self):
        logger.info(f"✅ Mock classifier provider initialized: {self.MODEL_NAME}")

    def is_enabled(self) -> bool:
        return True

    def get_model_info(self) -> Dict[str, str]:
        return {"name": self.MODEL_NAME, "provider": "mock"}

    def complete(self, system_prompt: str, user_text: str, max_tokens: int) -> List[str]:
        text = user_text.lower()
        for label, keywords in KEYWORD_RULES:
            if any(word in text for word in keywords):
                return [label]
        return ["Other"]
