"""
Typed models for Miro boards, items, and item write payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from miro_mcp import config
from miro_mcp._utils import _is_number
from miro_mcp.api import _mask_token
from miro_mcp.exceptions import TransportError, ValidationError
from miro_mcp.types import BoardRow


def _object_or_none(value, context):
    if value is None:
        return None
    if isinstance(value, dict):
        return value
    raise ValidationError(
        f"[ERROR] Invalid {context}: expected object, got {type(value).__name__}."
    )


@dataclass(frozen=True)
class Credential:
    """The Miro OAuth bearer token. Immutable for the process lifetime."""

    token: str

    def __repr__(self) -> str:
        return f"Credential(token={_mask_token(self.token)!r})"

    __str__ = __repr__


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Position:
    """Item coordinates. Board items are relative to the board center, frame
    children to the frame's top-left corner."""

    x: float = 0
    y: float = 0
    origin: str | None = config.DEFAULT_POSITION_ORIGIN

    @classmethod
    def from_value(cls, value, context="position"):
        data = _object_or_none(value, context)
        if data is None:
            return cls()
        x = data.get("x")
        y = data.get("y")
        x = 0 if x is None else x
        y = 0 if y is None else y
        if not _is_number(x) or not _is_number(y):
            raise ValidationError(f"[ERROR] Invalid {context}: x and y must be numbers.")
        return cls(x=x, y=y, origin=data.get("origin", config.DEFAULT_POSITION_ORIGIN))

    def to_payload(self) -> dict:
        payload: dict[str, Any] = {"x": self.x, "y": self.y}
        if self.origin:
            payload["origin"] = self.origin
        return payload


@dataclass(frozen=True)
class Geometry:
    width: float = config.DEFAULT_SHAPE_WIDTH
    height: float = config.DEFAULT_SHAPE_HEIGHT
    rotation: float | None = 0

    @classmethod
    def from_value(cls, value, context="geometry"):
        data = _object_or_none(value, context)
        if data is None:
            return cls()
        width = data.get("width")
        height = data.get("height")
        if width is None:
            width = config.DEFAULT_SHAPE_WIDTH
        if height is None:
            height = config.DEFAULT_SHAPE_HEIGHT
        rotation = data.get("rotation", 0)
        for name, val in (("width", width), ("height", height)):
            if not _is_number(val) or val <= 0:
                raise ValidationError(
                    f"[ERROR] Invalid {context}: {name} must be a positive number."
                )
        if rotation is not None and not _is_number(rotation):
            raise ValidationError(f"[ERROR] Invalid {context}: rotation must be a number.")
        return cls(width=width, height=height, rotation=rotation)

    def to_payload(self) -> dict:
        payload: dict[str, Any] = {"width": self.width, "height": self.height}
        if self.rotation is not None:
            payload["rotation"] = self.rotation
        return payload


# ---------------------------------------------------------------------------
# Boards
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Board:
    id: str
    name: str
    description: str | None = None

    @classmethod
    def from_api(cls, payload):
        if not isinstance(payload, dict) or "id" not in payload:
            raise TransportError("[ERROR] Unexpected board shape in Miro API response.")
        return cls(
            id=str(payload["id"]),
            name=payload.get("name") or "",
            description=payload.get("description") or None,
        )

    def to_row(self) -> BoardRow:
        return {"id": self.id, "name": self.name}


# ---------------------------------------------------------------------------
# Items (tagged by ``type``)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Item:
    """Any placeable board object. Subclasses add typed accessors for their
    ``data``/``style`` blocks; ``raw`` keeps the untouched API payload."""

    id: str
    type: str
    parent_id: str | None = None
    data: dict = field(default_factory=dict)
    raw: dict = field(default_factory=dict, repr=False)

    item_type: ClassVar[str | None] = None

    @property
    def style(self) -> dict:
        return self.raw.get("style") or {}

    @property
    def position(self) -> Position | None:
        pos = self.raw.get("position")
        if not isinstance(pos, dict):
            return None
        return Position(x=pos.get("x", 0), y=pos.get("y", 0), origin=pos.get("origin"))

    @classmethod
    def from_api(cls, payload):
        if not isinstance(payload, dict) or "id" not in payload:
            raise TransportError("[ERROR] Unexpected item shape in Miro API response.")
        item_type = str(payload.get("type") or "")
        variant = _ITEM_VARIANTS.get(item_type, Item)
        parent = payload.get("parent")
        parent_id = parent.get("id") if isinstance(parent, dict) else None
        data = payload.get("data")
        return variant(
            id=str(payload["id"]),
            type=item_type,
            parent_id=str(parent_id) if parent_id is not None else None,
            data=data if isinstance(data, dict) else {},
            raw=payload,
        )


@dataclass(frozen=True)
class StickyNote(Item):
    item_type: ClassVar[str | None] = "sticky_note"

    @property
    def content(self) -> str:
        return self.data.get("content") or ""

    @property
    def fill_color(self) -> str | None:
        return self.style.get("fillColor")


@dataclass(frozen=True)
class Shape(Item):
    item_type: ClassVar[str | None] = "shape"

    @property
    def shape(self) -> str | None:
        return self.data.get("shape")

    @property
    def content(self) -> str:
        return self.data.get("content") or ""


@dataclass(frozen=True)
class TextItem(Item):
    item_type: ClassVar[str | None] = "text"

    @property
    def content(self) -> str:
        return self.data.get("content") or ""


@dataclass(frozen=True)
class Frame(Item):
    item_type: ClassVar[str | None] = "frame"

    @property
    def title(self) -> str:
        return self.data.get("title") or ""


@dataclass(frozen=True)
class CardItem(Item):
    item_type: ClassVar[str | None] = "card"

    @property
    def title(self) -> str:
        return self.data.get("title") or ""


@dataclass(frozen=True)
class AppCard(CardItem):
    item_type: ClassVar[str | None] = "app_card"


@dataclass(frozen=True)
class ImageItem(Item):
    item_type: ClassVar[str | None] = "image"

    @property
    def title(self) -> str:
        return self.data.get("title") or ""


@dataclass(frozen=True)
class DocumentItem(ImageItem):
    item_type: ClassVar[str | None] = "document"


@dataclass(frozen=True)
class Embed(Item):
    item_type: ClassVar[str | None] = "embed"

    @property
    def url(self) -> str | None:
        return self.data.get("url")


_ITEM_VARIANTS: dict[str, type[Item]] = {
    cls.item_type: cls  # type: ignore[misc]
    for cls in (
        StickyNote,
        Shape,
        TextItem,
        Frame,
        CardItem,
        AppCard,
        ImageItem,
        DocumentItem,
        Embed,
    )
}


# ---------------------------------------------------------------------------
# Write payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ItemSpec:
    """Validated input contract for one entry of a bulk create."""

    type: str
    data: dict | None = None
    style: dict | None = None
    position: dict | None = None
    geometry: dict | None = None
    parent_id: str | None = None

    @classmethod
    def from_value(cls, value, context="item"):
        if isinstance(value, ItemSpec):
            return value
        if not isinstance(value, dict):
            raise ValidationError(
                f"[ERROR] Invalid {context}: expected object, got {type(value).__name__}."
            )
        item_type = value.get("type")
        if item_type not in config.VALID_ITEM_TYPES:
            raise ValidationError(
                f"[ERROR] Invalid {context} type {item_type!r}. "
                f"Valid: {', '.join(sorted(config.VALID_ITEM_TYPES))}"
            )
        parent = value.get("parent")
        parent_id = value.get("parent_id")
        if isinstance(parent, dict):
            parent_id = parent.get("id") or parent_id
        elif parent is not None:
            raise ValidationError(f"[ERROR] Invalid {context}.parent: expected object with id.")
        return cls(
            type=item_type,
            data=_object_or_none(value.get("data"), f"{context}.data"),
            style=_object_or_none(value.get("style"), f"{context}.style"),
            position=_object_or_none(value.get("position"), f"{context}.position"),
            geometry=_object_or_none(value.get("geometry"), f"{context}.geometry"),
            parent_id=str(parent_id) if parent_id else None,
        )

    def to_payload(self) -> dict:
        payload: dict[str, Any] = {"type": self.type}
        payload.update(
            item_body(
                data=self.data,
                style=self.style,
                position=self.position,
                geometry=self.geometry,
                parent_id=self.parent_id,
            )
        )
        return payload


def item_body(data=None, style=None, position=None, geometry=None, parent_id=None):
    """Shape a write body as {data, style, position, geometry, parent}, omitting empty parts."""
    body: dict[str, Any] = {}
    if data:
        body["data"] = data
    if style:
        body["style"] = style
    if position:
        body["position"] = position.to_payload() if isinstance(position, Position) else position
    if geometry:
        body["geometry"] = geometry.to_payload() if isinstance(geometry, Geometry) else geometry
    if parent_id:
        body["parent"] = {"id": parent_id}
    return body
