"""
Shared pure-utility functions for miro-mcp.

These helpers have no business logic and no side effects.
They are used across models.py and dispatcher.py.
"""


def _is_number(value):
    """True for int/float values, excluding bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)
