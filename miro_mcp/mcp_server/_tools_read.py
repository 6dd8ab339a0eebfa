"""Read tools: boards, items, and frames (4 tools)."""

from __future__ import annotations

from typing import Literal

from miro_mcp.dispatcher import Dispatcher
from miro_mcp.mcp_server._core import _call

ItemType = Literal[
    "sticky_note", "shape", "text", "image", "document", "card", "frame", "app_card", "embed"
]


class ReadTools:
    def __init__(self, dispatcher: Dispatcher):
        self._dispatcher = dispatcher

    def list_boards(self) -> str | dict:
        """List all available Miro boards and their IDs."""
        return _call(self._dispatcher, "list_boards")

    def get_board_items(self, board_id: str, item_type: ItemType | None = None) -> str | dict:
        """Get the items on a Miro board as JSON.

        Args:
            board_id: ID of the board.
            item_type: Only return items of this type.
        """
        return _call(self._dispatcher, "get_board_items", board_id=board_id, item_type=item_type)

    def get_frames(self, board_id: str) -> str | dict:
        """Get all frames on a Miro board as JSON."""
        return _call(self._dispatcher, "get_frames", board_id=board_id)

    def get_items_in_frame(self, board_id: str, frame_id: str) -> str | dict:
        """Get the items contained in a frame as JSON.

        Positions of these items are relative to the frame's top-left corner.
        """
        return _call(self._dispatcher, "get_items_in_frame", board_id=board_id, frame_id=frame_id)

    def register(self, mcp):
        """Register all read tools with the FastMCP instance."""
        mcp.tool()(self.list_boards)
        mcp.tool()(self.get_board_items)
        mcp.tool()(self.get_frames)
        mcp.tool()(self.get_items_in_frame)
