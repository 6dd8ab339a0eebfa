"""MCP server exposing Miro boards as tools and resources.

Package structure:
  __init__.py       FastMCP subclass, create_server(), re-exports
  __main__.py       ``python -m miro_mcp.mcp_server`` entry point
  _core.py          _call dispatcher wrapper, error response contract
  _tools_read.py    4 board/item/frame read tools
  _tools_write.py   3 creation tools
  _resources.py     miro://board/{board_id} resource and board listing

Run: miro-mcp --token <token>
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP
from mcp.types import Resource as MCPResource

from miro_mcp.client import MiroClient
from miro_mcp.dispatcher import Dispatcher
from miro_mcp.mcp_server._core import _call, _contract_error, _error_type  # noqa: F401
from miro_mcp.mcp_server._resources import BOARD_URI_TEMPLATE, BoardResources  # noqa: F401
from miro_mcp.mcp_server._tools_read import ReadTools
from miro_mcp.mcp_server._tools_write import WriteTools
from miro_mcp.models import Credential

INSTRUCTIONS = (
    "Miro whiteboard tools. "
    "Call list_boards first to find board IDs. "
    "Positions are relative to the board center (0, 0), or to a frame's "
    "top-left corner for items placed in a frame. "
    "bulk_create_items takes 1-20 items per call. "
    "Failed calls return a dict with ok=false and an error message."
)


class MiroMCP(FastMCP):
    """FastMCP server whose resource listing includes one entry per board."""

    def __init__(self, dispatcher: Dispatcher, **kwargs):
        self.dispatcher = dispatcher
        self._board_resources = BoardResources(dispatcher)
        super().__init__(**kwargs)

    async def list_resources(self) -> list[MCPResource]:
        resources = await super().list_resources()
        return resources + self._board_resources.listing()


def create_server(credential: Credential) -> MiroMCP:
    """Build the server: one MiroClient and Dispatcher for the process lifetime."""
    dispatcher = Dispatcher(MiroClient(credential))
    mcp = MiroMCP(dispatcher, name="miro", instructions=INSTRUCTIONS)
    for part in (ReadTools(dispatcher), WriteTools(dispatcher), mcp._board_resources):
        part.register(mcp)
    return mcp


def main():
    """Run the MCP server (stdio transport by default)."""
    from miro_mcp.cli import main as cli_main

    cli_main()
