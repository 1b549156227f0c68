from __future__ import annotations

"""Lightweight HTTP client util.

Uses stdlib urllib; the app only ever needs one GET returning JSON. A single
attempt is made per call, callers decide what a failure means.
"""
import http.client
import json
import urllib.error
import urllib.request
from typing import Any, Optional


class HttpError(Exception):
    """Request failed before a usable JSON body was obtained.

    ``status`` is set when the server answered; ``payload`` holds the decoded
    JSON error body when there was one.
    """

    def __init__(
        self, message: str, *, status: Optional[int] = None, payload: Any = None
    ):
        super().__init__(message)
        self.status = status
        self.payload = payload


class InvalidJsonError(HttpError):
    pass


def _decode(data: bytes) -> Any:
    return json.loads(data.decode("utf-8"))


def get_json(url: str, *, timeout: float = 10.0, log_url: Optional[str] = None) -> Any:
    """GET ``url`` and decode the JSON body.

    ``log_url`` replaces the url in error messages when it embeds a secret.
    """
    shown = log_url or url
    try:
        request = urllib.request.Request(url, headers={"Accept": "application/json"})
        with urllib.request.urlopen(request, timeout=timeout) as resp:  # nosec B310
            data = resp.read()
    except urllib.error.HTTPError as e:
        payload = None
        try:
            payload = _decode(e.read())
        except (ValueError, OSError, http.client.HTTPException):
            pass
        raise HttpError(f"HTTP {e.code} for {shown}", status=e.code, payload=payload) from e
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        reason = getattr(e, "reason", e)
        raise HttpError(f"Failed to reach {shown}: {reason}") from e
    except (http.client.HTTPException, ValueError) as e:
        # truncated body, bad status line, unusable url
        if isinstance(e, (ValueError, http.client.InvalidURL)):
            # InvalidURL / unknown url type echo the raw url, key included
            raise HttpError(f"Invalid request url {shown}") from e
        raise HttpError(f"Failed to read from {shown}: {type(e).__name__}: {e}") from e
    try:
        return _decode(data)
    except ValueError as e:  # JSON / unicode decode
        raise InvalidJsonError(f"Invalid JSON from {shown}: {e}") from e
