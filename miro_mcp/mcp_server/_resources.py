"""Board resources: miro://board/{board_id} returns a board's items as JSON."""

from __future__ import annotations

from mcp.types import Resource as MCPResource

from miro_mcp.dispatcher import Dispatcher

BOARD_URI_PREFIX = "miro://board/"
BOARD_URI_TEMPLATE = BOARD_URI_PREFIX + "{board_id}"


class BoardResources:
    def __init__(self, dispatcher: Dispatcher):
        self._dispatcher = dispatcher

    def read_board(self, board_id: str) -> str:
        """Items on a Miro board, as returned by the API."""
        return self._dispatcher.invoke("get_board_items", {"board_id": board_id})

    def listing(self) -> list[MCPResource]:
        """One resource per board visible to the token."""
        return [
            MCPResource(
                uri=f"{BOARD_URI_PREFIX}{board.id}",
                name=board.name,
                description=board.description or f"Miro board: {board.name}",
                mimeType="application/json",
            )
            for board in self._dispatcher.client.list_boards()
        ]

    def register(self, mcp):
        mcp.resource(
            BOARD_URI_TEMPLATE,
            name="board_items",
            description="Items on a Miro board",
            mime_type="application/json",
        )(self.read_board)
