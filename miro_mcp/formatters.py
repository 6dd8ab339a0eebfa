"""Text rendering for dispatcher results."""

from __future__ import annotations

import json

from miro_mcp.models import Board, Item
from miro_mcp.types import BoardRow


def pretty_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_board_rows(boards: list[Board]) -> str:
    """Boards as a JSON list of {id, name}, in the given order."""
    rows: list[BoardRow] = [b.to_row() for b in boards]
    return pretty_json(rows)


def format_items(items: list[Item]) -> str:
    """Items exactly as Miro returned them."""
    return pretty_json([i.raw for i in items])


def format_created(label, item: Item, board_id) -> str:
    return f"Created {label} {item.id} on board {board_id}"


def format_bulk_created(items: list[Item], board_id) -> str:
    ids = ", ".join(i.id for i in items)
    noun = "item" if len(items) == 1 else "items"
    summary = f"Created {len(items)} {noun} on board {board_id}"
    return f"{summary}: {ids}" if ids else summary
