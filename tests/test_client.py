"""Tests for the MusicThread API client."""

import httpx
import pytest
import respx

from musicthread_feed.client import ACCEPT_HEADER, MusicThreadClient
from musicthread_feed.errors import UpstreamRejected, UpstreamUnreachable

API_BASE = "https://api.musicthread.test"
THREAD_URL = f"{API_BASE}/api/v0/thread/abc"


class TestMusicThreadClient:
    @respx.mock
    def test_fetch_returns_payload_unchanged(self, sample_payload):
        respx.get(THREAD_URL).mock(return_value=httpx.Response(200, json=sample_payload))

        with MusicThreadClient(base_url=API_BASE) as client:
            data = client.fetch_thread("abc")

        assert data == sample_payload

    @respx.mock
    def test_sends_accept_header(self, sample_payload):
        route = respx.get(THREAD_URL).mock(
            return_value=httpx.Response(200, json=sample_payload)
        )

        with MusicThreadClient(base_url=API_BASE) as client:
            client.fetch_thread("abc")

        assert route.call_count == 1
        assert route.calls.last.request.headers["accept"] == ACCEPT_HEADER

    def test_thread_url_strips_trailing_slash(self):
        with MusicThreadClient(base_url=API_BASE + "/") as client:
            assert client.thread_url("k1") == f"{API_BASE}/api/v0/thread/k1"

    @respx.mock
    def test_error_status_with_message(self):
        respx.get(THREAD_URL).mock(
            return_value=httpx.Response(404, json={"error": "thread not found"})
        )

        with MusicThreadClient(base_url=API_BASE) as client:
            with pytest.raises(UpstreamRejected) as exc_info:
                client.fetch_thread("abc")

        assert exc_info.value.status == 404
        assert exc_info.value.upstream_message == "thread not found"
        assert "thread not found" in exc_info.value.public_message

    @respx.mock
    def test_error_status_without_json_body(self):
        respx.get(THREAD_URL).mock(
            return_value=httpx.Response(502, text="<html>Bad Gateway</html>")
        )

        with MusicThreadClient(base_url=API_BASE) as client:
            with pytest.raises(UpstreamRejected) as exc_info:
                client.fetch_thread("abc")

        assert exc_info.value.status == 502
        assert exc_info.value.upstream_message is None
        assert exc_info.value.public_message == "Failed to fetch response from MusicThread"

    @respx.mock
    def test_error_status_with_non_string_error(self):
        respx.get(THREAD_URL).mock(
            return_value=httpx.Response(400, json={"error": {"code": 12}})
        )

        with MusicThreadClient(base_url=API_BASE) as client:
            with pytest.raises(UpstreamRejected) as exc_info:
                client.fetch_thread("abc")

        assert exc_info.value.upstream_message is None

    @respx.mock
    def test_transport_error(self):
        respx.get(THREAD_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with MusicThreadClient(base_url=API_BASE) as client:
            with pytest.raises(UpstreamUnreachable):
                client.fetch_thread("abc")

    @respx.mock
    def test_timeout(self):
        respx.get(THREAD_URL).mock(side_effect=httpx.ReadTimeout("too slow"))

        with MusicThreadClient(base_url=API_BASE) as client:
            with pytest.raises(UpstreamUnreachable):
                client.fetch_thread("abc")

    @respx.mock
    def test_success_with_invalid_json(self):
        respx.get(THREAD_URL).mock(return_value=httpx.Response(200, text="not json"))

        with MusicThreadClient(base_url=API_BASE) as client:
            with pytest.raises(UpstreamUnreachable, match="not valid JSON"):
                client.fetch_thread("abc")

    @respx.mock
    def test_single_attempt_only(self):
        route = respx.get(THREAD_URL).mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        with MusicThreadClient(base_url=API_BASE) as client:
            with pytest.raises(UpstreamUnreachable):
                client.fetch_thread("abc")

        assert route.call_count == 1

    @respx.mock
    def test_key_that_cannot_form_a_url(self):
        with MusicThreadClient(base_url=API_BASE) as client:
            with pytest.raises(UpstreamUnreachable):
                client.fetch_thread("a\x01b")
