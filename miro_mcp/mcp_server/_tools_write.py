"""Write tools: sticky notes, shapes, and bulk creation (3 tools)."""

from __future__ import annotations

from typing import Any

from miro_mcp.dispatcher import Dispatcher
from miro_mcp.mcp_server._core import _call


class WriteTools:
    def __init__(self, dispatcher: Dispatcher):
        self._dispatcher = dispatcher

    def create_sticky_note(
        self,
        board_id: str,
        content: str,
        color: str = "yellow",
        x: float = 0,
        y: float = 0,
        parent_id: str | None = None,
    ) -> str | dict:
        """Create a sticky note on a Miro board.

        Args:
            board_id: ID of the board to create the sticky note on.
            content: Text content of the sticky note.
            color: gray, light_yellow, yellow, orange, light_green, green, dark_green,
                cyan, light_pink, pink, violet, red, light_blue, blue, dark_blue, black.
            x/y: Position; (0, 0) is the board center, or the frame's top-left
                corner when parent_id is set.
            parent_id: Frame to place the sticky note in.

        Returns:
            Confirmation text with the new sticky note ID.
        """
        return _call(
            self._dispatcher,
            "create_sticky_note",
            board_id=board_id,
            content=content,
            color=color,
            x=x,
            y=y,
            parent_id=parent_id,
        )

    def create_shape(
        self,
        board_id: str,
        shape: str = "rectangle",
        content: str | None = None,
        style: dict[str, Any] | None = None,
        position: dict[str, Any] | None = None,
        geometry: dict[str, Any] | None = None,
        parent_id: str | None = None,
    ) -> str | dict:
        """Create a shape on a Miro board.

        Args:
            shape: Basic shapes (rectangle, round_rectangle, circle, triangle, rhombus,
                star, cloud, arrows, ...) or flow-chart shapes (flow_chart_process,
                flow_chart_decision, flow_chart_terminator, ...).
            content: Text inside the shape.
            style: fillColor, fillOpacity (0-1), fontFamily, fontSize (10-288),
                borderColor, borderWidth (1-24), borderOpacity (0-1),
                borderStyle (normal/dotted/dashed), color, textAlign, textAlignVertical.
            position: {x, y}; defaults to the board center.
            geometry: {width, height, rotation}; defaults to 200x200, no rotation.
            parent_id: Frame to place the shape in.

        Returns:
            Confirmation text with the new shape ID.
        """
        return _call(
            self._dispatcher,
            "create_shape",
            board_id=board_id,
            shape=shape,
            content=content,
            style=style,
            position=position,
            geometry=geometry,
            parent_id=parent_id,
        )

    def bulk_create_items(self, board_id: str, items: list[dict[str, Any]]) -> str | dict:
        """Create 1-20 items in one request. The batch succeeds or fails as a whole.

        Args:
            items: Each {type, data, style, position, geometry, parent}, where type is
                sticky_note, shape, text, image, document, card, frame, app_card or embed.

        Returns:
            Confirmation text listing the created item IDs.
        """
        return _call(self._dispatcher, "bulk_create_items", board_id=board_id, items=items)

    def register(self, mcp):
        """Register all write tools with the FastMCP instance."""
        mcp.tool()(self.create_sticky_note)
        mcp.tool()(self.create_shape)
        mcp.tool()(self.bulk_create_items)
