"""miro-mcp: MCP server exposing Miro boards, items, and frames."""

from miro_mcp.client import MiroClient
from miro_mcp.config import VERSION
from miro_mcp.dispatcher import Dispatcher, Operation, Param
from miro_mcp.exceptions import (
    AuthError,
    MiroError,
    StartupConfigError,
    TransportError,
    UnknownOperationError,
    ValidationError,
)
from miro_mcp.models import (
    Board,
    Credential,
    Frame,
    Geometry,
    Item,
    ItemSpec,
    Position,
    Shape,
    StickyNote,
)
from miro_mcp.types import BoardRow, ContractError, ItemPayload

__all__ = [
    "VERSION",
    "MiroClient",
    "Dispatcher",
    "Operation",
    "Param",
    "MiroError",
    "StartupConfigError",
    "ValidationError",
    "TransportError",
    "AuthError",
    "UnknownOperationError",
    "Board",
    "Credential",
    "Frame",
    "Geometry",
    "Item",
    "ItemSpec",
    "Position",
    "Shape",
    "StickyNote",
    "BoardRow",
    "ContractError",
    "ItemPayload",
]
