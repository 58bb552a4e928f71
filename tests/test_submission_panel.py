import pytest

from app.models.comment import Theme
from app.ui.classify_client import ClassificationRequestError
from app.ui.map_view import PendingLocation
from app.ui.submission_panel import SubmissionPanel, SubmissionState


class RecordingStore:
    """Wraps the real store and counts insert calls."""

    def __init__(self, store, error=None):
        self.store = store
        self.error = error
        self.inserted = []

    def insert(self, comment):
        self.inserted.append(comment)
        if self.error is not None:
            raise self.error
        return self.store.insert(comment)


@pytest.fixture
def recording_store(store):
    return RecordingStore(store)


@pytest.fixture
def successes():
    return []


@pytest.fixture
def panel(classify_client, recording_store, successes):
    return SubmissionPanel(
        PendingLocation(lat=37.75, lng=-122.41),
        classify_client,
        recording_store,
        on_submit_success=successes.append,
    )


def _fill(panel, text, zip_code):
    panel.set_comment_text(text)
    panel.set_zip_code(zip_code)


def test_pothole_scenario(panel, classify_client, recording_store, successes):
    _fill(panel, "Pothole on Elm St", "94110")

    assert panel.submit() is True

    assert classify_client.calls == ["Pothole on Elm St"]
    assert len(recording_store.inserted) == 1
    row = recording_store.inserted[0]
    assert row.upvotes == 0
    assert row.theme == Theme.INFRASTRUCTURE
    assert (row.latitude, row.longitude) == (37.75, -122.41)

    assert len(successes) == 1
    saved = successes[0]
    assert saved.id and saved.created_at is not None
    assert saved.zip_code == "94110"
    assert panel.state == SubmissionState.SUCCESS


def test_fields_are_trimmed(panel, classify_client, recording_store):
    panel.comment_text = "  Broken streetlight  "
    panel.zip_code = " 94110 "

    assert panel.submit() is True
    assert classify_client.calls == ["Broken streetlight"]
    assert recording_store.inserted[0].zip_code == "94110"


@pytest.mark.parametrize("text, zip_code, message", [
    ("", "94110", "Please enter a comment before submitting."),
    ("   \n", "94110", "Please enter a comment before submitting."),
    ("Pothole on Elm St", "abcde", "Please enter a valid 5-digit ZIP code."),
    ("Pothole on Elm St", "9411", "Please enter a valid 5-digit ZIP code."),
    ("Pothole on Elm St", "", "Please enter a valid 5-digit ZIP code."),
])
def test_validation_errors_make_no_calls(panel, classify_client, recording_store, text, zip_code, message):
    _fill(panel, text, zip_code)

    assert panel.submit() is False
    assert panel.error == message
    assert panel.state == SubmissionState.EDITING
    assert classify_client.calls == []
    assert recording_store.inserted == []


def test_classification_failure_keeps_text(panel, classify_client, recording_store, successes):
    classify_client.error = ClassificationRequestError("Classification failed. Please try again.", status_code=502)
    _fill(panel, "Pothole on Elm St", "94110")

    assert panel.submit() is False
    assert panel.error == "Classification failed. Please try again."
    assert panel.state == SubmissionState.EDITING
    assert panel.comment_text == "Pothole on Elm St"
    assert panel.zip_code == "94110"
    assert len(classify_client.calls) == 1
    assert recording_store.inserted == []
    assert successes == []


def test_save_failure_keeps_text(panel, classify_client, recording_store, successes):
    recording_store.error = RuntimeError("permission denied")
    _fill(panel, "Pothole on Elm St", "94110")

    assert panel.submit() is False
    assert panel.error == "Failed to save your comment. Please try again."
    assert panel.comment_text == "Pothole on Elm St"
    assert len(classify_client.calls) == 1
    assert len(recording_store.inserted) == 1
    assert successes == []


def test_retry_after_failure_clears_error(panel, classify_client, recording_store):
    classify_client.error = ClassificationRequestError("down")
    _fill(panel, "Pothole on Elm St", "94110")
    panel.submit()
    assert panel.status_region.live == "assertive"

    classify_client.error = None
    assert panel.submit() is True
    assert panel.error == ""
    assert len(classify_client.calls) == 2
    assert len(recording_store.inserted) == 1


def test_status_region_is_always_present(panel):
    assert panel.status_region.role == "status"
    assert panel.status_region.live == "polite"
    assert not panel.status_region.visible

    panel.submit()
    assert panel.status_region.visible
    assert panel.status_region.live == "assertive"


def test_inputs_are_capped(panel):
    panel.set_comment_text("a" * 2500)
    panel.set_zip_code("9411099")
    assert len(panel.comment_text) == 2000
    assert panel.character_count == "2000 / 2000"
    assert panel.zip_code == "94110"


def test_submit_after_success_is_ignored(panel, classify_client):
    _fill(panel, "Pothole on Elm St", "94110")
    panel.submit()
    assert panel.submit() is False
    assert len(classify_client.calls) == 1


def test_cancel_calls_on_close(classify_client, recording_store):
    closed = []
    panel = SubmissionPanel(PendingLocation(1.0, 2.0), classify_client, recording_store, lambda c: None, on_close=lambda: closed.append(True))
    panel.cancel()
    assert closed == [True]
