"""Jira API request/response capture for debugging and fixture generation.

Enabled with JIRA_ADF_LOG_API=1 (also "true", "yes", "on"). Each call is
written as a pair of JSON files under ~/.jira-adf/api_logs/, or under
JIRA_ADF_LOG_API_DIR when set:

- {sequence:04d}_request.json
- {sequence:04d}_response.json

Credentials in headers are redacted before anything touches disk.
"""

import json
import logging
import os
import threading
from datetime import UTC, datetime
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

TRUTHY_VALUES = ("1", "true", "yes", "on")
SENSITIVE_HEADERS = {"authorization", "cookie", "set-cookie"}

_sequence_lock = threading.Lock()
_sequence_counter = 0


def _next_sequence() -> int:
    global _sequence_counter
    with _sequence_lock:
        _sequence_counter += 1
        return _sequence_counter


def _reset_sequence() -> None:
    """Reset sequence counter (for testing)."""
    global _sequence_counter
    with _sequence_lock:
        _sequence_counter = 0


def is_api_logging_enabled() -> bool:
    """Check whether JIRA_ADF_LOG_API is set to a truthy value."""
    return os.environ.get("JIRA_ADF_LOG_API", "").lower() in TRUTHY_VALUES


def get_log_directory() -> Path:
    """Directory that receives captured calls."""
    custom_dir = os.environ.get("JIRA_ADF_LOG_API_DIR")
    if custom_dir:
        return Path(custom_dir)
    return Path.home() / ".jira-adf" / "api_logs"


def _redact_headers(headers: httpx.Headers | dict) -> dict:
    """Mask credential headers, keeping the auth scheme visible.

    "Basic dXNlcjp0b2tlbg==" becomes "Basic [REDACTED]".
    """
    result = dict(headers)
    for key, value in result.items():
        if key.lower() not in SENSITIVE_HEADERS or not isinstance(value, str):
            continue
        scheme, sep, _ = value.partition(" ")
        result[key] = f"{scheme} [REDACTED]" if sep else "[REDACTED]"
    return result


def _endpoint(url: httpx.URL | str) -> str:
    """Resource name for a REST URL, e.g. "issue" for /rest/api/3/issue/KEY-1."""
    path = httpx.URL(str(url)).path
    marker = "/rest/api/3/"
    if marker in path:
        return path.split(marker, 1)[1].split("/", 1)[0]
    return path.strip("/") or "/"


def _decode_body(raw: bytes) -> object:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return raw.decode("utf-8", errors="replace")


def _write_entry(seq: int, suffix: str, data: dict) -> Path:
    log_dir = get_log_directory()
    log_dir.mkdir(parents=True, exist_ok=True)
    filepath = log_dir / f"{seq:04d}_{suffix}.json"
    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, default=str)
    return filepath


def _timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def log_request(request: httpx.Request) -> None:
    """Write a request to the log directory when capture is enabled."""
    if not is_api_logging_enabled():
        return

    try:
        seq = _next_sequence()
        request.extensions["log_sequence"] = seq
        filepath = _write_entry(
            seq,
            "request",
            {
                "sequence": seq,
                "timestamp": _timestamp(),
                "endpoint": _endpoint(request.url),
                "method": request.method,
                "url": str(request.url),
                "headers": _redact_headers(request.headers),
                "body": _decode_body(request.content),
            },
        )
        logger.debug("Logged Jira request to %s", filepath)
    except Exception as e:
        logger.warning("Failed to log Jira request: %s", e)


def log_response(response: httpx.Response) -> None:
    """Write a response to the log directory when capture is enabled.

    The file shares its sequence number with the matching request.
    """
    if not is_api_logging_enabled():
        return

    try:
        seq = response.request.extensions.get("log_sequence") or _next_sequence()
        filepath = _write_entry(
            seq,
            "response",
            {
                "sequence": seq,
                "timestamp": _timestamp(),
                "endpoint": _endpoint(response.request.url),
                "status_code": response.status_code,
                "url": str(response.request.url),
                "headers": _redact_headers(response.headers),
                "body": _decode_body(response.content),
            },
        )
        logger.debug("Logged Jira response to %s", filepath)
    except Exception as e:
        logger.warning("Failed to log Jira response: %s", e)


class LoggingTransport(httpx.BaseTransport):
    """Transport wrapper that captures every request/response pair."""

    def __init__(self, transport: httpx.BaseTransport | None = None):
        self._transport = transport or httpx.HTTPTransport()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        log_request(request)
        response = self._transport.handle_request(request)
        # Responses stream by default; read so the body can be logged
        response.read()
        log_response(response)
        return response

    def close(self) -> None:
        self._transport.close()


def create_logging_client(**kwargs) -> httpx.Client:
    """Create an httpx Client, wrapping the transport when capture is enabled.

    Args:
        **kwargs: Passed through to httpx.Client

    Returns:
        Configured httpx.Client
    """
    if is_api_logging_enabled():
        kwargs.setdefault("transport", LoggingTransport())
    return httpx.Client(**kwargs)


def clear_logs() -> int:
    """Delete all captured files.

    Returns:
        Number of files deleted
    """
    log_dir = get_log_directory()
    if not log_dir.exists():
        return 0

    count = 0
    for f in log_dir.glob("*.json"):
        try:
            f.unlink()
            count += 1
        except OSError as e:
            logger.warning("Failed to delete %s: %s", f, e)

    _reset_sequence()
    return count
