"""
Client-side controllers for the map UI.

Headless, event-driven state machines for the map, the submission form
and the comment modal. Rendering goes through a MapAdapter; the folium
adapter is the one shipped here.
"""

from app.ui.map_view import MapAdapter, MapView, MarkerSink, PendingLocation
from app.ui.folium_map import FoliumMapAdapter, create_map_adapter
from app.ui.submission_panel import SubmissionPanel, SubmissionState
from app.ui.comment_modal import CommentModal, UpvoteState
from app.ui.classify_client import ClassifyClient, ClassificationRequestError
from app.ui.vote_flags import JsonFileKeyValueStore, InMemoryKeyValueStore, VoteFlagStore
from app.ui.map_container import MapContainer

__all__ = [
    "MapAdapter",
    "MapView",
    "MarkerSink",
    "PendingLocation",
    "FoliumMapAdapter",
    "create_map_adapter",
    "SubmissionPanel",
    "SubmissionState",
    "CommentModal",
    "UpvoteState",
    "ClassifyClient",
    "ClassificationRequestError",
    "JsonFileKeyValueStore",
    "InMemoryKeyValueStore",
    "VoteFlagStore",
    "MapContainer",
]
