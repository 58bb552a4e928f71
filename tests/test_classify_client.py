from unittest import mock

import pytest
import requests

from app.models.comment import Theme
from app.ui.classify_client import ClassificationRequestError, ClassifyClient


def _response(status_code, payload):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.reason = "Error"
    response.json.return_value = payload
    return response


def test_posts_comment_and_returns_theme():
    session = mock.Mock()
    session.post.return_value = _response(200, {"theme": "Public Safety"})
    client = ClassifyClient("http://api.local/", session=session)

    assert client.classify("Break-ins on my block") == Theme.PUBLIC_SAFETY
    session.post.assert_called_once_with(
        "http://api.local/api/classify",
        json={"comment_text": "Break-ins on my block"},
        timeout=15.0,
    )


def test_rejected_request_carries_server_message():
    session = mock.Mock()
    session.post.return_value = _response(422, {"error": '"comment_text" must not be empty.'})
    client = ClassifyClient("http://api.local", session=session)

    with pytest.raises(ClassificationRequestError) as exc_info:
        client.classify(" ")
    assert exc_info.value.is_rejected
    assert str(exc_info.value) == '"comment_text" must not be empty.'


def test_service_failure():
    session = mock.Mock()
    session.post.return_value = _response(502, {"error": "Classification failed. Please try again."})
    client = ClassifyClient("http://api.local", session=session)

    with pytest.raises(ClassificationRequestError) as exc_info:
        client.classify("Pothole")
    assert exc_info.value.status_code == 502
    assert not exc_info.value.is_rejected


def test_transport_failure_is_not_retried():
    session = mock.Mock()
    session.post.side_effect = requests.ConnectionError("refused")
    client = ClassifyClient("http://api.local", session=session)

    with pytest.raises(ClassificationRequestError) as exc_info:
        client.classify("Pothole")
    assert exc_info.value.status_code is None
    assert session.post.call_count == 1
