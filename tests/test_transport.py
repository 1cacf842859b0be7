"""
test_transport.py — Tests for session creation, URL masking and error mapping.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from yt_caption_extractor.errors import TransientError
from yt_caption_extractor.transport import TimeoutHTTPAdapter, create_session, get, mask_url


class TestMaskUrl:

    def test_masks_key(self) -> None:
        masked = mask_url("https://www.googleapis.com/youtube/v3/captions?videoId=x&key=SECRET")
        assert "SECRET" not in masked
        assert "videoId=x" in masked

    def test_masks_signature(self) -> None:
        masked = mask_url("https://www.youtube.com/api/timedtext?v=x&signature=ABC123")
        assert "ABC123" not in masked

    def test_url_without_query_untouched(self) -> None:
        url = "https://www.youtube.com/watch"
        assert mask_url(url) == url


class TestGet:

    def test_passes_timeout_and_returns_response(self) -> None:
        session = MagicMock()
        response = get(session, "https://example.com", params={"a": "1"}, timeout=7.5)

        assert response is session.get.return_value
        session.get.assert_called_once_with(
            "https://example.com", params={"a": "1"}, headers=None, timeout=7.5,
        )

    def test_timeout_becomes_transient_error(self) -> None:
        session = MagicMock()
        session.get.side_effect = requests.Timeout("read timed out")

        with pytest.raises(TransientError) as exc_info:
            get(session, "https://example.com", timeout=1.0)
        assert "timed out after 1.0s" in exc_info.value.message
        assert exc_info.value.http_status == 502

    def test_connection_error_becomes_transient_error(self) -> None:
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("name resolution failed")

        with pytest.raises(TransientError):
            get(session, "https://example.com", timeout=1.0)

    def test_non_success_status_is_returned_not_raised(self) -> None:
        session = MagicMock()
        session.get.return_value.status_code = 500
        assert get(session, "https://example.com", timeout=1.0).status_code == 500


class TestCreateSession:

    def test_headers_and_adapters(self) -> None:
        session = create_session(9.0, user_agent="TestAgent/1.0")

        assert session.headers["User-Agent"] == "TestAgent/1.0"
        adapter = session.get_adapter("https://www.youtube.com")
        assert isinstance(adapter, TimeoutHTTPAdapter)
        assert adapter.timeout == 9.0

    def test_adapter_fills_in_missing_timeout(self) -> None:
        adapter = TimeoutHTTPAdapter(timeout=4.0)
        with patch("requests.adapters.HTTPAdapter.send") as mock_send:
            adapter.send(MagicMock(), timeout=None)
            assert mock_send.call_args.kwargs["timeout"] == 4.0

    def test_adapter_keeps_explicit_timeout(self) -> None:
        adapter = TimeoutHTTPAdapter(timeout=4.0)
        with patch("requests.adapters.HTTPAdapter.send") as mock_send:
            adapter.send(MagicMock(), timeout=1.5)
            assert mock_send.call_args.kwargs["timeout"] == 1.5
