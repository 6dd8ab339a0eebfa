"""
miro-mcp: MCP server for Miro whiteboards
"""

import argparse
import json
import sys

from miro_mcp import config
from miro_mcp.client import MiroClient
from miro_mcp.dispatcher import Dispatcher
from miro_mcp.exceptions import MiroError
from miro_mcp.mcp_server import create_server
from miro_mcp.models import Credential

TRANSPORTS = ("stdio", "sse", "streamable-http")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="miro-mcp",
        description="Expose Miro boards to MCP clients as tools and resources.",
        epilog=f"The token can also be set with the {config.TOKEN_ENV_VAR} environment variable.",
    )
    parser.add_argument("-t", "--token", help="Miro OAuth token (overrides the environment)")
    parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default="stdio",
        help="MCP transport (default: stdio)",
    )
    parser.add_argument(
        "--host", default=config.MCP_HOST, help="Bind host for sse/streamable-http"
    )
    parser.add_argument(
        "--port", type=int, default=config.MCP_PORT, help="Bind port for sse/streamable-http"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log HTTP requests to stderr"
    )
    parser.add_argument(
        "--list-operations",
        action="store_true",
        help="Print the operation catalog as JSON and exit",
    )
    parser.add_argument("--version", action="version", version=f"miro-mcp {config.VERSION}")
    return parser


def _emit_error(err):
    print(str(err), file=sys.stderr)


def main(argv=None):
    ns = build_parser().parse_args(argv)
    if ns.verbose:
        config.HTTP_LOG_ENABLED = True

    if ns.list_operations:
        # Catalog only; no request is made, so no token is needed.
        dispatcher = Dispatcher(MiroClient(Credential(ns.token or "")))
        print(json.dumps(dispatcher.describe(), indent=2, ensure_ascii=False))
        sys.exit(0)

    try:
        credential = Credential(config.resolve_token(ns.token))
        server = create_server(credential)
    except MiroError as e:
        _emit_error(e)
        sys.exit(e.exit_code)

    if ns.transport != "stdio":
        server.settings.host = ns.host
        server.settings.port = ns.port
    server.run(transport=ns.transport)


if __name__ == "__main__":
    main()
