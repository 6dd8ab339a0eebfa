"""
MiroClient: typed wrapper over the Miro REST API (v2).

One method per remote operation, one HTTP request per call.
Raises ValidationError before sending anything when arguments are invalid,
and TransportError/AuthError when Miro answers with a failure.
"""

from __future__ import annotations

from typing import Any

from miro_mcp import config
from miro_mcp.api import api_request, quote_id
from miro_mcp.exceptions import TransportError, ValidationError
from miro_mcp.models import Board, Credential, Geometry, Item, ItemSpec, Position, item_body


def _expect_data_list(result, operation):
    """Return the ``data`` list of a Miro collection response."""
    if isinstance(result, dict) and isinstance(result.get("data"), list):
        return result["data"]
    if isinstance(result, list):
        return result
    raise TransportError(
        f"[ERROR] Unexpected {operation} response shape: expected a data list, "
        f"got {type(result).__name__}."
    )


def _expect_object(result, operation):
    if isinstance(result, dict) and "id" in result:
        return result
    raise TransportError(
        f"[ERROR] Unexpected {operation} response shape: expected an item object."
    )


def _require_id(value, field):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"[ERROR] {field} is required.")
    return value.strip()


class MiroClient:
    """Public API surface for a Miro account.

    Holds one credential for its lifetime. Nothing is cached: every read
    re-fetches and every write goes straight to Miro.
    """

    def __init__(self, credential: Credential):
        if isinstance(credential, str):
            credential = Credential(credential)
        self._credential = credential

    def _request(self, path, data=None, method="GET", params=None) -> Any:
        return api_request(self._credential, path, data=data, method=method, params=params)

    # -------------------------------------------------------------------
    # Read commands
    # -------------------------------------------------------------------

    def list_boards(self) -> list[Board]:
        """List boards visible to the token, in the order Miro returns them."""
        result = self._request("/boards")
        return [Board.from_api(b) for b in _expect_data_list(result, "list boards")]

    def list_items(
        self,
        board_id: str,
        *,
        item_type: str | None = None,
        parent_id: str | None = None,
    ) -> list[Item]:
        """List items on a board.

        Args:
            item_type: Only items of this type (e.g. ``frame``).
            parent_id: Only items whose parent is this item (e.g. a frame id).

        Returns:
            list of Item variants, remote order.
        """
        board_id = _require_id(board_id, "board_id")
        if item_type is not None and item_type not in config.VALID_ITEM_TYPES:
            raise ValidationError(
                f"[ERROR] Invalid item type '{item_type}'. "
                f"Valid: {', '.join(sorted(config.VALID_ITEM_TYPES))}"
            )
        params = {
            "type": item_type,
            "parent_item_id": parent_id,
            "limit": config.ITEMS_PAGE_LIMIT,
        }
        result = self._request(f"/boards/{quote_id(board_id)}/items", params=params)
        items = [Item.from_api(i) for i in _expect_data_list(result, "list items")]
        if item_type is not None:
            items = [i for i in items if i.type == item_type]
        if parent_id is not None:
            items = [i for i in items if i.parent_id == parent_id]
        return items

    def list_frames(self, board_id: str) -> list[Item]:
        return self.list_items(board_id, item_type="frame")

    def list_items_in_frame(self, board_id: str, frame_id: str) -> list[Item]:
        frame_id = _require_id(frame_id, "frame_id")
        return self.list_items(board_id, parent_id=frame_id)

    # -------------------------------------------------------------------
    # Write commands
    # -------------------------------------------------------------------

    def create_sticky_note(
        self,
        board_id: str,
        content: str,
        *,
        color: str = config.DEFAULT_STICKY_COLOR,
        position: Position | None = None,
        parent_id: str | None = None,
    ) -> Item:
        """Create a sticky note. Defaults to yellow at the board center."""
        board_id = _require_id(board_id, "board_id")
        if color not in config.VALID_STICKY_COLORS:
            raise ValidationError(
                f"[ERROR] Invalid sticky note color '{color}'. "
                f"Valid: {', '.join(sorted(config.VALID_STICKY_COLORS))}"
            )
        body = item_body(
            data={"content": content},
            style={"fillColor": color},
            position=position or Position(),
            parent_id=parent_id,
        )
        result = self._request(f"/boards/{quote_id(board_id)}/sticky_notes", body, "POST")
        return Item.from_api(_expect_object(result, "create sticky note"))

    def create_shape(
        self,
        board_id: str,
        *,
        shape: str = config.DEFAULT_SHAPE,
        content: str | None = None,
        style: dict | None = None,
        position: Position | None = None,
        geometry: Geometry | None = None,
        parent_id: str | None = None,
    ) -> Item:
        """Create a basic or flow-chart shape. Defaults to a 200x200
        rectangle at the board center."""
        board_id = _require_id(board_id, "board_id")
        if shape not in config.VALID_SHAPES:
            raise ValidationError(
                f"[ERROR] Invalid shape '{shape}'. Valid: {', '.join(sorted(config.VALID_SHAPES))}"
            )
        data: dict[str, Any] = {"shape": shape}
        if content:
            data["content"] = content
        body = item_body(
            data=data,
            style=style,
            position=position or Position(),
            geometry=geometry or Geometry(),
            parent_id=parent_id,
        )
        result = self._request(f"/boards/{quote_id(board_id)}/shapes", body, "POST")
        return Item.from_api(_expect_object(result, "create shape"))

    def bulk_create(self, board_id: str, items) -> list[Item]:
        """Create up to 20 items in a single request.

        Miro applies the batch as one transaction and reports only success or
        failure for the whole request.
        """
        board_id = _require_id(board_id, "board_id")
        items = list(items or [])
        if not items:
            raise ValidationError("[ERROR] bulk create needs at least one item.")
        if len(items) > config.BULK_MAX_ITEMS:
            raise ValidationError(
                f"[ERROR] bulk create accepts at most {config.BULK_MAX_ITEMS} items, "
                f"got {len(items)}."
            )
        specs = [ItemSpec.from_value(v, f"items[{i}]") for i, v in enumerate(items)]
        result = self._request(
            f"/boards/{quote_id(board_id)}/items/bulk",
            [s.to_payload() for s in specs],
            "POST",
        )
        return [Item.from_api(i) for i in _expect_data_list(result, "bulk create")]
