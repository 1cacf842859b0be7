"""
transport.py — The single place where the pipeline talks to the network.

Every request goes through get(), which applies a bounded timeout and maps
requests' exception zoo onto TransientError.  Strategies receive a
requests.Session so tests can hand them a fake one.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

import requests
from requests.adapters import HTTPAdapter

from yt_caption_extractor.errors import TransientError

logger = logging.getLogger(__name__)

_SENSITIVE_PARAMS = {"key", "token", "signature", "sig"}


class TimeoutHTTPAdapter(HTTPAdapter):
    """HTTPAdapter that applies a default timeout to requests made without one.

    Third-party code sharing the session (youtube-transcript-api) never
    passes a timeout, so the bound has to live on the adapter.
    """

    def __init__(self, *args, timeout: float, **kwargs) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(timeout: float, user_agent: str | None = None) -> requests.Session:
    """Build a Session with browser-like headers and a default timeout."""
    session = requests.Session()
    adapter = TimeoutHTTPAdapter(timeout=timeout)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "Accept": "*/*",
        "Accept-Language": "en-US,en;q=0.9",
    })
    if user_agent:
        session.headers["User-Agent"] = user_agent
    return session


def mask_url(url: str) -> str:
    """Hide API keys and signatures before a URL reaches the logs."""
    parsed = urlparse(url)
    if not parsed.query:
        return url
    params = parse_qs(parsed.query, keep_blank_values=True)
    masked = {
        k: ["***"] * len(v) if k.lower() in _SENSITIVE_PARAMS else v
        for k, v in params.items()
    }
    return urlunparse(parsed._replace(query=urlencode(masked, doseq=True)))


def get(
    session: requests.Session,
    url: str,
    *,
    params: dict | None = None,
    headers: dict | None = None,
    timeout: float,
) -> requests.Response:
    """
    Issue a GET and return the response, whatever its status.

    Status handling is left to the caller because the meaning of a 403
    differs between endpoints.

    Raises:
        TransientError: On timeout, connection failure or any other
            transport-level problem.
    """
    shown = mask_url(url if not params else f"{url}?{urlencode(params)}")
    logger.debug("GET %s", shown)
    try:
        return session.get(url, params=params, headers=headers, timeout=timeout)
    except requests.Timeout as exc:
        raise TransientError(shown, f"timed out after {timeout}s") from exc
    except requests.RequestException as exc:
        raise TransientError(shown, str(exc)) from exc
