import json

import pytest

from app.models.comment import CommentCreate, Theme
from app.ui.comment_modal import CommentModal, UpvoteState
from app.ui.vote_flags import (
    UPVOTED_KEY,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    VoteFlagStore,
)


@pytest.fixture
def saved(store):
    return store.insert(CommentCreate(
        comment_text="Loud construction at 6am",
        zip_code="94110",
        latitude=37.75,
        longitude=-122.41,
        theme=Theme.NOISE_AND_POLLUTION,
    ))


@pytest.fixture
def commits():
    return []


@pytest.fixture
def modal(saved, store, vote_flags, commits):
    return CommentModal(saved, store, vote_flags, on_upvote_committed=lambda cid, n: commits.append((cid, n)))


def test_successful_upvote(modal, saved, store, vote_flags, commits):
    assert modal.state == UpvoteState.NOT_VOTED

    assert modal.upvote() is True

    assert modal.upvotes == 1
    assert modal.state == UpvoteState.VOTED
    assert vote_flags.has_voted(saved.id)
    assert store.get(saved.id).upvotes == 1
    assert commits == [(saved.id, 1)]


def test_failed_upvote_rolls_back(modal, saved, vote_flags, comments_collection, commits):
    comments_collection.fail_writes = True

    assert modal.upvote() is False

    assert modal.upvotes == 0
    assert modal.state == UpvoteState.NOT_VOTED
    assert not vote_flags.has_voted(saved.id)
    assert modal.error == "Could not record your upvote. Please try again."
    assert commits == []


def test_optimistic_state_is_visible_during_request(saved, vote_flags):
    seen = {}

    class SlowStore:
        def update(self, comment_id, fields):
            seen["state"] = modal.state
            seen["count"] = modal.upvotes
            seen["persisted"] = vote_flags.has_voted(comment_id)
            seen["fields"] = fields

    modal = CommentModal(saved, SlowStore(), vote_flags)
    modal.upvote()

    assert seen == {"state": UpvoteState.VOTING, "count": 1, "persisted": True, "fields": {"upvotes": 1}}


def test_second_upvote_is_a_no_op(modal, comments_collection):
    modal.upvote()
    assert modal.upvote() is False
    assert len(comments_collection.update_calls) == 1


def test_device_that_already_voted_cannot_vote(saved, store, local_storage, comments_collection):
    local_storage.set(UPVOTED_KEY, json.dumps([saved.id]))
    modal = CommentModal(saved, store, VoteFlagStore(local_storage))

    assert modal.has_voted
    assert modal.upvote() is False
    assert comments_collection.update_calls == []


def test_upvote_label(saved, store, vote_flags):
    modal = CommentModal(saved.model_copy(update={"upvotes": 1}), store, vote_flags)
    assert modal.upvote_label == "1 upvote"
    modal.upvotes = 3
    assert modal.upvote_label == "3 upvotes"


def test_theme_display(modal):
    assert modal.theme == Theme.NOISE_AND_POLLUTION
    assert modal.theme_color == "#eab308"


def test_close(saved, store, vote_flags):
    closed = []
    CommentModal(saved, store, vote_flags, on_close=lambda: closed.append(True)).close()
    assert closed == [True]


@pytest.mark.parametrize("raw", ["not json", "{\"a\": 1}", "[1, 2]", ""])
def test_corrupt_flags_read_as_empty(raw):
    flags = VoteFlagStore(InMemoryKeyValueStore({UPVOTED_KEY: raw}))
    assert flags.load() == set()


def test_storage_write_failures_are_ignored(saved, store, comments_collection):
    class BrokenStorage(KeyValueStore):
        def get(self, key):
            return None

        def set(self, key, value):
            raise OSError("quota exceeded")

    modal = CommentModal(saved, store, VoteFlagStore(BrokenStorage()))
    assert modal.upvote() is True
    assert modal.upvotes == 1


def test_json_file_storage_round_trip(tmp_path):
    path = tmp_path / "votes.json"
    flags = VoteFlagStore(JsonFileKeyValueStore(str(path)))
    assert flags.load() == set()

    flags.add("a")
    flags.add("b")
    flags.discard("a")

    assert json.loads(json.loads(path.read_text())[UPVOTED_KEY]) == ["b"]
    assert VoteFlagStore(JsonFileKeyValueStore(str(path))).has_voted("b")


def test_json_file_storage_tolerates_corrupt_file(tmp_path):
    path = tmp_path / "votes.json"
    path.write_text("{broken")
    flags = VoteFlagStore(JsonFileKeyValueStore(str(path)))

    assert flags.load() == set()
    flags.add("x")
    assert flags.has_voted("x")
