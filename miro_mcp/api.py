"""
HTTP request layer and security helpers for miro-mcp.

Every call makes exactly one attempt. There is no retry and no backoff.
"""

import hashlib
import http.client
import json
import re
import sys
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid

from miro_mcp import config
from miro_mcp.exceptions import AuthError, HTTPError, TransportError

# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def _remote_error_message(body):
    """Pull Miro's own error message out of an error body, if it has one."""
    if not body:
        return ""
    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return _sanitize_error(body)
    if isinstance(parsed, dict):
        message = parsed.get("message")
        if isinstance(message, str) and message:
            return _sanitize_error(message)
    return _sanitize_error(body)


# ---------------------------------------------------------------------------
# Structured HTTP logging
# ---------------------------------------------------------------------------


def _sanitize_url_for_log(url):
    """Mask sensitive query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = []
    for key, value in pairs:
        if key.lower() in {"token", "access_token"}:
            masked.append((key, "***"))
        else:
            masked.append((key, value))
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _is_sampled_request(request_id):
    """Decide if a request should be logged based on sample rate."""
    rate = config.HTTP_LOG_SAMPLE_RATE
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


def _error_envelope(message, status=None, request_id=None, detail=None):
    """Build a consistent HTTP error message."""
    meta = []
    if status is not None:
        meta.append(f"status={status}")
    if request_id:
        meta.append(f"request_id={request_id}")
    suffix = f" ({', '.join(meta)})" if meta else ""
    body = f"[ERROR] {message}{suffix}"
    if detail:
        body += f"\n{detail}"
    return body


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _http_request(url, data=None, headers=None, method="GET"):
    """Make one HTTP request with standard error handling.
    Returns parsed JSON on success.
    Raises HTTPError for HTTP errors (caller handles specific codes).
    Raises TransportError on network/parse errors."""
    body = json.dumps(data).encode("utf-8") if data is not None else None
    request_id = (headers or {}).get("X-Request-Id")
    safe_url = _sanitize_url_for_log(url)
    sampled = _is_sampled_request(request_id)
    timeout = config.HTTP_TIMEOUT_SECONDS if config.HTTP_TIMEOUT_SECONDS > 0 else None

    start = time.perf_counter()
    req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
    if sampled:
        _log_http_event(
            phase="request",
            method=method,
            url=safe_url,
            request_id=request_id,
            timeout_seconds=timeout,
        )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            content_type = resp.headers.get("Content-Type", "")
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
                raise TransportError(
                    "[ERROR] Response too large from Miro API "
                    f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
                )
            if sampled:
                _log_http_event(
                    phase="response",
                    method=method,
                    url=safe_url,
                    status=getattr(resp, "status", 200),
                    content_type=content_type,
                    bytes=len(raw),
                    latency_ms=round((time.perf_counter() - start) * 1000, 2),
                    request_id=request_id,
                )
            if not raw:
                return {}
            try:
                return json.loads(raw.decode("utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError):
                if content_type and "json" not in content_type.lower():
                    raise TransportError(
                        f"[ERROR] Unexpected Content-Type from server "
                        f"({content_type}). This may be a proxy or "
                        "network issue."
                    ) from None
                raise TransportError(
                    "[ERROR] Unexpected response from Miro API (not valid JSON)."
                ) from None
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        if sampled:
            _log_http_event(
                phase="response",
                method=method,
                url=safe_url,
                status=e.code,
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error="timeout",
                request_id=request_id,
            )
        raise TransportError(
            _error_envelope(
                f"Request timed out after {timeout} seconds. Is the Miro API reachable?",
                request_id=request_id,
            )
        ) from e
    except urllib.error.URLError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error=f"url_error: {e.reason}",
                request_id=request_id,
            )
        raise TransportError(
            _error_envelope(f"Connection failed: {e.reason}", request_id=request_id)
        ) from e
    except (OSError, http.client.HTTPException) as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error=f"connection_error: {e}",
                request_id=request_id,
            )
        raise TransportError(
            _error_envelope(f"Connection failed: {e}", request_id=request_id)
        ) from e


def build_url(path, params=None):
    """Join *path* onto the API base URL, dropping None-valued query params."""
    url = config.BASE_URL + path
    if params:
        query = {k: v for k, v in params.items() if v is not None}
        if query:
            url += "?" + urllib.parse.urlencode(query)
    return url


def api_request(credential, path, data=None, method="GET", params=None):
    """Make an authenticated request against the Miro REST API.

    Translates HTTP failures into AuthError (401/403) or TransportError,
    keeping the status and Miro's own error message.
    """
    url = build_url(path, params)
    headers = {
        "Authorization": f"Bearer {credential.token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
        "X-Request-Id": str(uuid.uuid4()),
    }
    try:
        return _http_request(url, data, headers, method)
    except HTTPError as e:
        detail = _remote_error_message(e.body)
        message = f"Miro API error: {e.code} {e.reason}"
        if detail:
            message += f" - {detail}"
        if e.code in (401, 403):
            raise AuthError(
                f"[TOKEN_REJECTED] {message}. Check that the Miro OAuth token is "
                "valid and has the boards:read/boards:write scopes.",
                status=e.code,
            ) from e
        server_req_id = e.headers.get("X-Request-Id") if e.headers else None
        raise TransportError(
            _error_envelope(message, status=e.code, request_id=server_req_id),
            status=e.code,
        ) from e


def quote_id(value):
    """Percent-encode a board or item id for use as a path segment."""
    return urllib.parse.quote(str(value), safe="")
