"""
Operation dispatcher: a static registry of named operations.

Each Operation declares its parameters; ``Dispatcher.invoke`` binds loosely
typed arguments against them (required, defaults, enum membership, numeric
ranges, one level of nested objects), calls the MiroClient and renders the
result as text. Validation is shallow on purpose: there are no cross-field
checks, and unknown keys inside a nested object pass through to Miro.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from miro_mcp import config
from miro_mcp._utils import _is_number
from miro_mcp.client import MiroClient
from miro_mcp.exceptions import UnknownOperationError, ValidationError
from miro_mcp.formatters import (
    format_board_rows,
    format_bulk_created,
    format_created,
    format_items,
)
from miro_mcp.models import Geometry, Position

_JSON_TYPES = {
    "string": "string",
    "number": "number",
    "integer": "integer",
    "boolean": "boolean",
    "object": "object",
    "array": "array",
}


def _type_matches(kind, value):
    if kind == "string":
        return isinstance(value, str)
    if kind == "number":
        return _is_number(value)
    if kind == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if kind == "boolean":
        return isinstance(value, bool)
    if kind == "object":
        return isinstance(value, Mapping)
    if kind == "array":
        return isinstance(value, (list, tuple))
    return True


@dataclass(frozen=True)
class Param:
    """One declared operation parameter."""

    name: str
    kind: str
    description: str = ""
    required: bool = False
    default: Any = None
    choices: frozenset[str] | None = None
    minimum: float | None = None
    maximum: float | None = None
    min_items: int | None = None
    max_items: int | None = None
    fields: tuple[Param, ...] = ()

    def bind(self, value, context=None):
        """Validate *value* and return it, or the default when absent."""
        label = context or self.name
        if value is None:
            if self.required:
                raise ValidationError(f"[ERROR] Missing required parameter '{label}'.")
            return self.default
        if not _type_matches(self.kind, value):
            raise ValidationError(
                f"[ERROR] Parameter '{label}' must be of type {self.kind}, "
                f"got {type(value).__name__}."
            )
        if self.choices is not None and value not in self.choices:
            raise ValidationError(
                f"[ERROR] Invalid {label} '{value}'. Valid: {', '.join(sorted(self.choices))}"
            )
        if self.minimum is not None and value < self.minimum:
            raise ValidationError(f"[ERROR] {label} must be >= {self.minimum}, got {value}.")
        if self.maximum is not None and value > self.maximum:
            raise ValidationError(f"[ERROR] {label} must be <= {self.maximum}, got {value}.")
        if self.kind == "array":
            value = list(value)
            if self.min_items is not None and len(value) < self.min_items:
                raise ValidationError(
                    f"[ERROR] {label} needs at least {self.min_items} entries, got {len(value)}."
                )
            if self.max_items is not None and len(value) > self.max_items:
                raise ValidationError(
                    f"[ERROR] {label} accepts at most {self.max_items} entries, got {len(value)}."
                )
        if self.kind == "object":
            value = dict(value)
            for f in self.fields:
                if f.name in value:
                    value[f.name] = f.bind(value[f.name], f"{label}.{f.name}")
        return value

    def schema(self) -> dict:
        out: dict[str, Any] = {"type": _JSON_TYPES.get(self.kind, self.kind)}
        if self.description:
            out["description"] = self.description
        if self.default is not None:
            out["default"] = self.default
        if self.choices is not None:
            out["enum"] = sorted(self.choices)
        if self.minimum is not None:
            out["minimum"] = self.minimum
        if self.maximum is not None:
            out["maximum"] = self.maximum
        if self.min_items is not None:
            out["minItems"] = self.min_items
        if self.max_items is not None:
            out["maxItems"] = self.max_items
        if self.fields:
            out["properties"] = {f.name: f.schema() for f in self.fields}
        return out


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    params: tuple[Param, ...]
    handler: Callable[[dict], str]

    def bind(self, arguments) -> dict:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise ValidationError(
                f"[ERROR] Arguments for {self.name} must be an object, "
                f"got {type(arguments).__name__}."
            )
        return {p.name: p.bind(arguments.get(p.name)) for p in self.params}

    def input_schema(self) -> dict:
        return {
            "type": "object",
            "properties": {p.name: p.schema() for p in self.params},
            "required": [p.name for p in self.params if p.required],
        }


# ---------------------------------------------------------------------------
# Shared parameter declarations
# ---------------------------------------------------------------------------

BOARD_ID = Param("board_id", "string", "ID of the Miro board", required=True)

POSITION_FIELDS = (
    Param("x", "number", "X coordinate"),
    Param("y", "number", "Y coordinate"),
    Param("origin", "string", "Anchor point of the coordinates", choices=frozenset({"center"})),
)

GEOMETRY_FIELDS = (
    Param("width", "number", "Width in board units", minimum=1),
    Param("height", "number", "Height in board units", minimum=1),
    Param("rotation", "number", "Rotation in degrees"),
)

SHAPE_STYLE_FIELDS = (
    Param("fillColor", "string", "Fill color (hex, e.g. #ff0000)"),
    Param("fillOpacity", "number", "Fill opacity", minimum=0, maximum=1),
    Param("fontFamily", "string", "Font family"),
    Param("fontSize", "number", "Font size", minimum=10, maximum=288),
    Param("borderColor", "string", "Border color (hex)"),
    Param("borderWidth", "number", "Border width", minimum=1, maximum=24),
    Param("borderOpacity", "number", "Border opacity", minimum=0, maximum=1),
    Param("borderStyle", "string", "Border style", choices=frozenset(config.VALID_BORDER_STYLES)),
    Param("color", "string", "Text color (hex)"),
    Param(
        "textAlign",
        "string",
        "Horizontal text alignment",
        choices=frozenset(config.VALID_TEXT_ALIGN),
    ),
    Param(
        "textAlignVertical",
        "string",
        "Vertical text alignment",
        choices=frozenset(config.VALID_TEXT_ALIGN_VERTICAL),
    ),
)


class Dispatcher:
    """Maps operation names to MiroClient calls and formatted text results."""

    def __init__(self, client: MiroClient):
        self.client = client
        self._catalog = self._build_catalog()

    def _build_catalog(self) -> dict[str, Operation]:
        operations = [
            Operation(
                "list_boards",
                "List all available Miro boards and their IDs",
                (),
                self._list_boards,
            ),
            Operation(
                "get_board_items",
                "Get the items on a Miro board, optionally only one item type",
                (
                    BOARD_ID,
                    Param(
                        "item_type",
                        "string",
                        "Only return items of this type",
                        choices=frozenset(config.VALID_ITEM_TYPES),
                    ),
                ),
                self._get_board_items,
            ),
            Operation(
                "get_frames",
                "Get all frames on a Miro board",
                (BOARD_ID,),
                self._get_frames,
            ),
            Operation(
                "get_items_in_frame",
                "Get the items contained in a frame on a Miro board",
                (
                    BOARD_ID,
                    Param("frame_id", "string", "ID of the frame", required=True),
                ),
                self._get_items_in_frame,
            ),
            Operation(
                "create_sticky_note",
                "Create a sticky note on a Miro board",
                (
                    Param(
                        "board_id",
                        "string",
                        "ID of the board to create the sticky note on",
                        required=True,
                    ),
                    Param("content", "string", "Text content of the sticky note", required=True),
                    Param(
                        "color",
                        "string",
                        "Color of the sticky note",
                        default=config.DEFAULT_STICKY_COLOR,
                        choices=frozenset(config.VALID_STICKY_COLORS),
                    ),
                    Param("x", "number", "X coordinate position", default=0),
                    Param("y", "number", "Y coordinate position", default=0),
                    Param("parent_id", "string", "Frame to place the sticky note in"),
                ),
                self._create_sticky_note,
            ),
            Operation(
                "create_shape",
                "Create a basic or flow-chart shape on a Miro board",
                (
                    BOARD_ID,
                    Param(
                        "shape",
                        "string",
                        "Shape kind",
                        default=config.DEFAULT_SHAPE,
                        choices=frozenset(config.VALID_SHAPES),
                    ),
                    Param("content", "string", "Text inside the shape"),
                    Param("style", "object", "Shape style", fields=SHAPE_STYLE_FIELDS),
                    Param("position", "object", "Position on the board", fields=POSITION_FIELDS),
                    Param("geometry", "object", "Size and rotation", fields=GEOMETRY_FIELDS),
                    Param("parent_id", "string", "Frame to place the shape in"),
                ),
                self._create_shape,
            ),
            Operation(
                "bulk_create_items",
                "Create up to 20 items on a Miro board in a single request",
                (
                    BOARD_ID,
                    Param(
                        "items",
                        "array",
                        "Items to create: {type, data, style, position, geometry, parent}",
                        required=True,
                        min_items=1,
                        max_items=config.BULK_MAX_ITEMS,
                    ),
                ),
                self._bulk_create_items,
            ),
        ]
        return {op.name: op for op in operations}

    # -------------------------------------------------------------------
    # Catalog access
    # -------------------------------------------------------------------

    def operations(self) -> list[Operation]:
        return list(self._catalog.values())

    def get(self, name) -> Operation:
        try:
            return self._catalog[name]
        except KeyError:
            raise UnknownOperationError(f"Unknown operation: {name}") from None

    def describe(self) -> list[dict]:
        """Catalog as [{name, description, inputSchema}]."""
        return [
            {"name": op.name, "description": op.description, "inputSchema": op.input_schema()}
            for op in self.operations()
        ]

    def invoke(self, name, arguments=None) -> str:
        """Validate *arguments* for operation *name*, run it, return its text."""
        op = self.get(name)
        return op.handler(op.bind(arguments))

    # -------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------

    def _list_boards(self, args):
        return format_board_rows(self.client.list_boards())

    def _get_board_items(self, args):
        items = self.client.list_items(args["board_id"], item_type=args["item_type"])
        return format_items(items)

    def _get_frames(self, args):
        return format_items(self.client.list_frames(args["board_id"]))

    def _get_items_in_frame(self, args):
        return format_items(self.client.list_items_in_frame(args["board_id"], args["frame_id"]))

    def _create_sticky_note(self, args):
        board_id = args["board_id"]
        note = self.client.create_sticky_note(
            board_id,
            args["content"],
            color=args["color"],
            position=Position(x=args["x"], y=args["y"]),
            parent_id=args["parent_id"],
        )
        return format_created("sticky note", note, board_id)

    def _create_shape(self, args):
        board_id = args["board_id"]
        shape = self.client.create_shape(
            board_id,
            shape=args["shape"],
            content=args["content"],
            style=args["style"],
            position=Position.from_value(args["position"]),
            geometry=Geometry.from_value(args["geometry"]),
            parent_id=args["parent_id"],
        )
        return format_created(f"{args['shape']} shape", shape, board_id)

    def _bulk_create_items(self, args):
        board_id = args["board_id"]
        created = self.client.bulk_create(board_id, args["items"])
        return format_bulk_created(created, board_id)
