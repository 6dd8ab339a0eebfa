"""Tests for cli.py: argparse flags, token resolution, server startup."""

import json
from unittest.mock import patch

import pytest

pytest.importorskip("mcp", reason="mcp package not installed")

from miro_mcp import config  # noqa: E402
from miro_mcp.cli import build_parser, main  # noqa: E402


class TestBuildParser:
    def test_defaults(self):
        ns = build_parser().parse_args([])
        assert ns.token is None
        assert ns.transport == "stdio"
        assert ns.verbose is False
        assert ns.list_operations is False

    def test_rejects_unknown_transport(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--transport", "carrier-pigeon"])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert config.VERSION in capsys.readouterr().out


class TestMain:
    def test_list_operations_needs_no_token(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--list-operations"])
        assert exc_info.value.code == 0
        catalog = json.loads(capsys.readouterr().out)
        assert len(catalog) == 7
        assert catalog[0]["name"] == "list_boards"

    def test_missing_token_exits_2(self, capsys):
        with patch("miro_mcp.cli.create_server") as mock_create:
            with pytest.raises(SystemExit) as exc_info:
                main([])
        assert exc_info.value.code == 2
        assert "MIRO_OAUTH_TOKEN" in capsys.readouterr().err
        mock_create.assert_not_called()

    def test_token_flag_starts_stdio_server(self):
        with patch("miro_mcp.cli.create_server") as mock_create:
            main(["--token", "flag-token"])
        credential = mock_create.call_args.args[0]
        assert credential.token == "flag-token"
        mock_create.return_value.run.assert_called_once_with(transport="stdio")

    def test_env_token(self, monkeypatch):
        monkeypatch.setenv("MIRO_OAUTH_TOKEN", "env-token")
        with patch("miro_mcp.cli.create_server") as mock_create:
            main([])
        assert mock_create.call_args.args[0].token == "env-token"

    def test_http_transport_sets_bind_address(self):
        with patch("miro_mcp.cli.create_server") as mock_create:
            main(
                [
                    "-t",
                    "tok",
                    "--transport",
                    "streamable-http",
                    "--host",
                    "0.0.0.0",
                    "--port",
                    "9000",
                ]
            )
        server = mock_create.return_value
        assert server.settings.host == "0.0.0.0"
        assert server.settings.port == 9000
        server.run.assert_called_once_with(transport="streamable-http")

    def test_verbose_enables_http_log(self):
        with patch("miro_mcp.cli.create_server"):
            main(["-t", "tok", "-v"])
        assert config.HTTP_LOG_ENABLED is True
