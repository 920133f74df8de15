"""Tests for the HTTP media uploader using ``responses``."""

from __future__ import annotations

import pytest
import requests
import responses

from mediahub.infra.media import HttpMediaUploader
from mediahub.services._shared.errors import MediaUploadError
from tests.helpers.fakes import image

UPLOAD_URL = "https://media.test/upload"


@pytest.fixture()
def uploader() -> HttpMediaUploader:
    return HttpMediaUploader(url=UPLOAD_URL, token="svc-token", timeout=5)


@responses.activate
def test_returns_secure_url(uploader):
    responses.add(
        responses.POST,
        UPLOAD_URL,
        json={"secure_url": "https://cdn.test/a.png", "url": "http://cdn.test/a.png"},
    )

    assert uploader.upload(image("a.png")) == "https://cdn.test/a.png"

    sent = responses.calls[0].request
    assert sent.headers["Authorization"] == "Bearer svc-token"
    assert b'filename="a.png"' in sent.body


@responses.activate
def test_falls_back_to_plain_url(uploader):
    responses.add(responses.POST, UPLOAD_URL, json={"url": "http://cdn.test/b.png"})
    assert uploader.upload(image("b.png")) == "http://cdn.test/b.png"


@responses.activate
def test_no_authorization_header_without_token():
    responses.add(responses.POST, UPLOAD_URL, json={"url": "http://cdn.test/c.png"})

    HttpMediaUploader(url=UPLOAD_URL).upload(image("c.png"))

    assert "Authorization" not in responses.calls[0].request.headers


@pytest.mark.parametrize(
    ("status", "kwargs"),
    [
        (400, {"json": {"error": "bad file"}}),
        (413, {"json": {"error": "too large"}}),
        (200, {"body": "not json"}),
        (200, {"json": ["unexpected"]}),
        (200, {"json": {"public_id": "abc"}}),
    ],
)
@responses.activate
def test_unusable_reply_yields_none(uploader, status, kwargs):
    responses.add(responses.POST, UPLOAD_URL, status=status, **kwargs)
    assert uploader.upload(image()) is None


@responses.activate
def test_server_error_raises(uploader):
    responses.add(responses.POST, UPLOAD_URL, status=503)
    with pytest.raises(MediaUploadError):
        uploader.upload(image())


@responses.activate
def test_transport_error_raises(uploader):
    responses.add(responses.POST, UPLOAD_URL, body=requests.ConnectionError("refused"))
    with pytest.raises(MediaUploadError, match="unavailable"):
        uploader.upload(image())
