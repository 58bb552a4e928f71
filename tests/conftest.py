"""
Shared fixtures: in-memory stand-ins for Firestore, the map adapter and
the classify client, so tests never touch the network.
"""

from datetime import datetime, timezone
from itertools import count
from types import SimpleNamespace

import pytest
from firebase_admin import firestore
from google.api_core.exceptions import NotFound

from app.models.comment import Theme
from app.services.classifier.base import ClassifierProvider, ClassificationUnavailable
from app.services.comment_store import CommentStore
from app.ui.map_view import MapAdapter
from app.ui.vote_flags import InMemoryKeyValueStore, VoteFlagStore


# ── Firestore ────────────────────────────────────────────────────────────


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = dict(data) if data is not None else None

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeWatch:
    def __init__(self, collection, callback):
        self.collection = collection
        self.callback = callback
        self.active = True

    def unsubscribe(self):
        self.active = False
        self.collection.watches.remove(self)


class FakeDocRef:
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.id = doc_id

    def set(self, data):
        if self.collection.fail_writes:
            raise RuntimeError("permission denied")
        stored = {
            key: (datetime.now(timezone.utc) if value is firestore.SERVER_TIMESTAMP else value)
            for key, value in data.items()
        }
        self.collection.docs[self.id] = stored
        self.collection.notify_added(self.id)

    def get(self):
        return FakeSnapshot(self.id, self.collection.docs.get(self.id))

    def update(self, fields):
        if self.collection.fail_writes:
            raise RuntimeError("permission denied")
        if self.id not in self.collection.docs:
            raise NotFound(f"No document to update: {self.id}")
        self.collection.docs[self.id].update(fields)
        self.collection.update_calls.append((self.id, dict(fields)))


class FakeCollection:
    def __init__(self):
        self.docs = {}
        self.watches = []
        self.update_calls = []
        self.fail_writes = False
        self.fail_reads = False
        self._ids = count(1)

    def document(self, doc_id=None):
        return FakeDocRef(self, doc_id or f"doc{next(self._ids)}")

    def stream(self):
        if self.fail_reads:
            raise RuntimeError("unavailable")
        return [FakeSnapshot(doc_id, data) for doc_id, data in self.docs.items()]

    def on_snapshot(self, callback):
        watch = FakeWatch(self, callback)
        self.watches.append(watch)
        # Like Firestore: the first snapshot lists what already exists
        changes = [self._change(doc_id) for doc_id in self.docs]
        callback(self.stream(), changes, datetime.now(timezone.utc))
        return watch

    def _change(self, doc_id):
        return SimpleNamespace(type=SimpleNamespace(name="ADDED"), document=FakeSnapshot(doc_id, self.docs[doc_id]))

    def notify_added(self, doc_id):
        for watch in list(self.watches):
            watch.callback(self.stream(), [self._change(doc_id)], datetime.now(timezone.utc))


class FakeFirestore:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def fake_db():
    return FakeFirestore()


@pytest.fixture
def store(fake_db):
    return CommentStore(fake_db, "comments")


@pytest.fixture
def comments_collection(fake_db):
    return fake_db.collection("comments")


# ── Classifier ───────────────────────────────────────────────────────────


class FakeProvider(ClassifierProvider):
    def __init__(self, reply=None, error=None):
        self.reply = reply if reply is not None else ["Other"]
        self.error = error
        self.calls = []

    def is_enabled(self):
        return True

    def get_model_info(self):
        return {"name": "fake", "provider": "fake"}

    def complete(self, system_prompt, user_text, max_tokens):
        self.calls.append({"system": system_prompt, "text": user_text, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return list(self.reply)


class FakeClassifyClient:
    def __init__(self, theme=Theme.INFRASTRUCTURE, error=None):
        self.theme = theme
        self.error = error
        self.calls = []

    def classify(self, comment_text):
        self.calls.append(comment_text)
        if self.error is not None:
            raise self.error
        return self.theme


@pytest.fixture
def classify_client():
    return FakeClassifyClient()


@pytest.fixture
def make_provider():
    return FakeProvider


@pytest.fixture
def make_classify_client():
    return FakeClassifyClient


@pytest.fixture
def unavailable():
    return ClassificationUnavailable("connection refused")


# ── Map ──────────────────────────────────────────────────────────────────


class FakeMapAdapter(MapAdapter):
    def __init__(self):
        self.markers = {}
        self.pending = {}
        self.focused = []
        self.removed = False
        self._ids = count(1)

    def add_marker(self, spec):
        handle = f"m{next(self._ids)}"
        self.markers[handle] = spec
        return handle

    def add_pending_marker(self, lat, lng):
        handle = f"p{next(self._ids)}"
        self.pending[handle] = (lat, lng)
        return handle

    def remove_marker(self, handle):
        self.markers.pop(handle, None)
        self.pending.pop(handle, None)

    def focus_marker(self, handle):
        self.focused.append(handle)

    def remove(self):
        self.markers.clear()
        self.pending.clear()
        self.removed = True

    def marker_ids(self):
        return [spec.comment_id for spec in self.markers.values()]


@pytest.fixture
def adapter():
    return FakeMapAdapter()


# ── Vote flags ───────────────────────────────────────────────────────────


@pytest.fixture
def local_storage():
    return InMemoryKeyValueStore()


@pytest.fixture
def vote_flags(local_storage):
    return VoteFlagStore(local_storage)
