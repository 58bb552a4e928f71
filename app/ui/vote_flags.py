"""
Per-device upvote flags.

Remembers which comments this device already upvoted so the modal can
disable repeat votes. This is a convenience guard, not enforcement: the
server keeps no per-device record, so clearing the file or using another
device allows voting again.

Reads never fail (absent or corrupt data reads as "nothing voted").
Writes that fail are logged at debug level and otherwise ignored.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Set
import json
import logging
import os

logger = logging.getLogger(__name__)


UPVOTED_KEY = "civic-map:upvoted"


class KeyValueStore(ABC):
    """Small string key-value store (the device's local storage)."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value pairs kept in one JSON object on disk."""

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except (OSError, ValueError):
            data = {}
        data[key] = value
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)


class VoteFlagStore:
    """The device's set of upvoted comment ids, JSON-array encoded."""

    def __init__(self, storage: KeyValueStore, key: str = UPVOTED_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> Set[str]:
        try:
            raw = self.storage.get(self.key)
            if not raw:
                return set()
            parsed = json.loads(raw)
        except Exception as e:
            logger.debug(f"Ignoring unreadable upvote flags: {e}")
            return set()
        if not isinstance(parsed, list):
            return set()
        return {item for item in parsed if isinstance(item, str)}

    def _save(self, ids: Set[str]) -> None:
        try:
            self.storage.set(self.key, json.dumps(sorted(ids)))
        except Exception as e:
            logger.debug(f"Could not persist upvote flags: {e}")

    def has_voted(self, comment_id: str) -> bool:
        return comment_id in self.load()

    def add(self, comment_id: str) -> None:
        ids = self.load()
        ids.add(comment_id)
        self._save(ids)

    def discard(self, comment_id: str) -> None:
        ids = self.load()
        ids.discard(comment_id)
        self._save(ids)
