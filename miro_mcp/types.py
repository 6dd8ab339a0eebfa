"""Typed response definitions for tool results.

These TypedDicts document the shape of dicts produced by the dispatcher and
the MCP layer. They are optional: runtime behavior is unchanged (plain dicts).
"""

from __future__ import annotations

from typing import TypedDict


class BoardRow(TypedDict):
    """One entry of the list_boards result."""

    id: str
    name: str


class ParentRef(TypedDict):
    id: str


class ItemPayload(TypedDict, total=False):
    """Write body for one item (also one entry of a bulk create)."""

    type: str
    data: dict
    style: dict
    position: dict
    geometry: dict
    parent: ParentRef


class ErrorDetail(TypedDict):
    type: str
    message: str


class ContractError(TypedDict):
    """Error envelope returned by MCP tools instead of raising."""

    ok: bool
    schema_version: str
    type: str
    error: str
    error_detail: ErrorDetail
