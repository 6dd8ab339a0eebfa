"""Tests for api.py: security helpers, HTTP error handling, request building."""

import http.client
import io
import json
import urllib.error
from unittest.mock import patch

import pytest

from miro_mcp.api import (
    _http_request,
    _is_sampled_request,
    _log_http_event,
    _mask_token,
    _remote_error_message,
    _sanitize_error,
    _sanitize_url_for_log,
    api_request,
    build_url,
    quote_id,
)
from miro_mcp.exceptions import AuthError, HTTPError, TransportError


def _http_error(code, reason, body=b"", headers=None):
    return urllib.error.HTTPError(
        "https://api.miro.com/v2/boards", code, reason, headers or {}, io.BytesIO(body)
    )


def _ok_response(mock_urlopen, body, content_type="application/json"):
    mock_resp = mock_urlopen.return_value.__enter__.return_value
    mock_resp.status = 200
    mock_resp.headers.get.return_value = content_type
    mock_resp.read.return_value = body
    return mock_resp


class TestMaskToken:
    def test_long_token(self):
        assert _mask_token("abcdef1234567890") == "abcdef..."

    def test_short_token(self):
        assert _mask_token("abc") == "abc"


class TestSanitizeUrlForLog:
    def test_masks_token_param(self):
        safe = _sanitize_url_for_log("https://api.miro.com/v2/boards?token=secret&limit=5")
        assert "secret" not in safe
        assert "limit=5" in safe

    def test_url_without_query_unchanged(self):
        assert _sanitize_url_for_log("https://api.miro.com/v2/boards") == (
            "https://api.miro.com/v2/boards"
        )


class TestSanitizeError:
    def test_strips_html(self):
        assert _sanitize_error("<h1>Error</h1><p>Details</p>") == "ErrorDetails"

    def test_truncates_long_body(self):
        result = _sanitize_error("x" * 1000)
        assert result.endswith("... [truncated]")

    def test_empty_body(self):
        assert _sanitize_error("") == ""
        assert _sanitize_error(None) == ""


class TestRemoteErrorMessage:
    def test_extracts_miro_message(self):
        body = json.dumps({"status": 400, "code": "invalidParameters", "message": "Bad color"})
        assert _remote_error_message(body) == "Bad color"

    def test_non_json_body(self):
        assert _remote_error_message("<b>gateway</b> down") == "gateway down"

    def test_json_without_message(self):
        assert _remote_error_message('{"status": 500}') == '{"status": 500}'


class TestSampling:
    def test_sample_rate_zero_disables(self, monkeypatch):
        monkeypatch.setattr("miro_mcp.api.config.HTTP_LOG_SAMPLE_RATE", 0.0)
        assert _is_sampled_request("req-1") is False

    def test_sample_rate_one_enables(self, monkeypatch):
        monkeypatch.setattr("miro_mcp.api.config.HTTP_LOG_SAMPLE_RATE", 1.0)
        assert _is_sampled_request("req-1") is True

    def test_sampling_is_deterministic(self, monkeypatch):
        monkeypatch.setattr("miro_mcp.api.config.HTTP_LOG_SAMPLE_RATE", 0.5)
        assert _is_sampled_request("req-stable") == _is_sampled_request("req-stable")


class TestLogHttpEvent:
    def test_disabled_by_default(self, capsys):
        _log_http_event(phase="request")
        assert capsys.readouterr().err == ""

    def test_writes_json_to_stderr(self, capsys, monkeypatch):
        monkeypatch.setattr("miro_mcp.api.config.HTTP_LOG_ENABLED", True)
        _log_http_event(phase="request", method="GET")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("[HTTP] ")
        assert json.loads(captured.err[len("[HTTP] ") :]) == {"method": "GET", "phase": "request"}


class TestBuildUrl:
    def test_drops_none_params(self):
        url = build_url("/boards/b1/items", {"type": None, "limit": 50})
        assert url == "https://api.miro.com/v2/boards/b1/items?limit=50"

    def test_no_params(self):
        assert build_url("/boards") == "https://api.miro.com/v2/boards"

    def test_quote_id_encodes_reserved_chars(self):
        assert quote_id("uXjVO=/x") == "uXjVO%3D%2Fx"


class TestHttpRequest:
    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_returns_parsed_json(self, mock_urlopen):
        _ok_response(mock_urlopen, b'{"data": []}')
        assert _http_request("https://api.miro.com/v2/boards") == {"data": []}

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_sends_json_body(self, mock_urlopen):
        _ok_response(mock_urlopen, b'{"id": "1"}')
        _http_request("https://api.miro.com/v2/x", [{"type": "text"}], method="POST")
        req = mock_urlopen.call_args.args[0]
        assert json.loads(req.data) == [{"type": "text"}]
        assert req.get_method() == "POST"

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_empty_body_is_empty_dict(self, mock_urlopen):
        _ok_response(mock_urlopen, b"")
        assert _http_request("https://api.miro.com/v2/x") == {}

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_no_timeout_by_default(self, mock_urlopen):
        _ok_response(mock_urlopen, b"{}")
        _http_request("https://api.miro.com/v2/x")
        assert mock_urlopen.call_args.kwargs["timeout"] is None

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_http_error_raises_once_without_retry(self, mock_urlopen):
        mock_urlopen.side_effect = _http_error(503, "Service Unavailable", b"busy")
        with pytest.raises(HTTPError) as exc_info:
            _http_request("https://api.miro.com/v2/boards")
        assert exc_info.value.code == 503
        assert exc_info.value.body == "busy"
        assert mock_urlopen.call_count == 1

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_url_error_is_transport_error(self, mock_urlopen):
        mock_urlopen.side_effect = urllib.error.URLError("name resolution failed")
        with pytest.raises(TransportError) as exc_info:
            _http_request("https://api.miro.com/v2/boards")
        assert "Connection failed" in str(exc_info.value)
        assert mock_urlopen.call_count == 1

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_connection_reset_is_transport_error(self, mock_urlopen):
        mock_urlopen.side_effect = ConnectionResetError("reset")
        with pytest.raises(TransportError) as exc_info:
            _http_request("https://api.miro.com/v2/boards")
        assert "Connection failed: reset" in str(exc_info.value)
        assert mock_urlopen.call_count == 1

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_remote_disconnect_while_reading(self, mock_urlopen):
        resp = _ok_response(mock_urlopen, b"")
        resp.read.side_effect = http.client.RemoteDisconnected("closed")
        with pytest.raises(TransportError) as exc_info:
            _http_request("https://api.miro.com/v2/boards")
        assert "closed" in str(exc_info.value)

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_timeout_is_transport_error(self, mock_urlopen):
        mock_urlopen.side_effect = TimeoutError()
        with pytest.raises(TransportError) as exc_info:
            _http_request("https://api.miro.com/v2/boards")
        assert "timed out" in str(exc_info.value)

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_response_size_limit(self, mock_urlopen, monkeypatch):
        monkeypatch.setattr("miro_mcp.api.config.HTTP_MAX_RESPONSE_BYTES", 4)
        _ok_response(mock_urlopen, b"12345")
        with pytest.raises(TransportError) as exc_info:
            _http_request("https://api.miro.com/v2/boards")
        assert "Response too large" in str(exc_info.value)

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_html_content_type_gives_proxy_message(self, mock_urlopen):
        _ok_response(mock_urlopen, b"<html>Error</html>", "text/html; charset=utf-8")
        with pytest.raises(TransportError) as exc_info:
            _http_request("https://api.miro.com/v2/boards")
        assert "proxy" in str(exc_info.value)

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_invalid_json(self, mock_urlopen):
        _ok_response(mock_urlopen, b"not valid json{{")
        with pytest.raises(TransportError) as exc_info:
            _http_request("https://api.miro.com/v2/boards")
        assert "not valid JSON" in str(exc_info.value)


class TestApiRequest:
    @patch("miro_mcp.api._http_request")
    def test_sends_bearer_token(self, mock_http, credential):
        mock_http.return_value = {"data": []}
        api_request(credential, "/boards")
        url, data, headers, method = mock_http.call_args.args
        assert url == "https://api.miro.com/v2/boards"
        assert data is None
        assert method == "GET"
        assert headers["Authorization"] == "Bearer fake-token-123456"
        assert headers["Content-Type"] == "application/json"
        assert headers["X-Request-Id"]

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_401_is_auth_error_with_status_and_single_call(self, mock_urlopen, credential):
        body = json.dumps({"status": 401, "message": "No authorization token was found"})
        mock_urlopen.side_effect = _http_error(401, "Unauthorized", body.encode())
        with pytest.raises(TransportError) as exc_info:
            api_request(credential, "/boards")
        err = exc_info.value
        assert isinstance(err, AuthError)
        assert err.status == 401
        assert "401" in str(err)
        assert "No authorization token was found" in str(err)
        assert mock_urlopen.call_count == 1

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_403_is_auth_error(self, mock_urlopen, credential):
        mock_urlopen.side_effect = _http_error(403, "Forbidden")
        with pytest.raises(AuthError):
            api_request(credential, "/boards")

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_4xx_keeps_remote_message(self, mock_urlopen, credential):
        body = json.dumps({"status": 400, "message": "Invalid fillColor"})
        mock_urlopen.side_effect = _http_error(
            400, "Bad Request", body.encode(), {"X-Request-Id": "srv-1"}
        )
        with pytest.raises(TransportError) as exc_info:
            api_request(credential, "/boards/b1/sticky_notes", {"data": {}}, "POST")
        err = exc_info.value
        assert not isinstance(err, AuthError)
        assert err.status == 400
        assert "400" in str(err)
        assert "Invalid fillColor" in str(err)
        assert "request_id=srv-1" in str(err)

    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_token_never_logged(self, mock_urlopen, credential, capsys, monkeypatch):
        monkeypatch.setattr("miro_mcp.api.config.HTTP_LOG_ENABLED", True)
        _ok_response(mock_urlopen, b'{"data": []}')
        api_request(credential, "/boards")
        err = capsys.readouterr().err
        assert "[HTTP]" in err
        assert credential.token not in err

    @patch("miro_mcp.api._http_request")
    def test_passes_through_non_http_errors(self, mock_http, credential):
        mock_http.side_effect = TransportError("[ERROR] Connection failed: x")
        with pytest.raises(TransportError):
            api_request(credential, "/boards")
        assert mock_http.call_count == 1


class TestHttpLogging:
    @patch("miro_mcp.api.urllib.request.urlopen")
    def test_logs_response_phase(self, mock_urlopen, capsys, monkeypatch):
        monkeypatch.setattr("miro_mcp.api.config.HTTP_LOG_ENABLED", True)
        resp = _ok_response(mock_urlopen, b"{}")
        resp.status = 200
        _http_request("https://api.miro.com/v2/x", headers={"X-Request-Id": "r1"})
        lines = [json.loads(line[7:]) for line in capsys.readouterr().err.splitlines()]
        assert [entry["phase"] for entry in lines] == ["request", "response"]
        assert lines[1]["status"] == 200
