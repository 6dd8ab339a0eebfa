"""
miro-mcp shared configuration and constants.
Imports nothing from other project files except the exception hierarchy.
"""

import os

from miro_mcp.exceptions import StartupConfigError

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")


def load_env():
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    return env


def _env_value(key):
    """Process environment first, then the .env file."""
    raw = os.environ.get(key)
    if raw is None:
        raw = env.get(key)
    return raw


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = _env_value(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = _env_value(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(key, default):
    """Parse float env values with fallback."""
    raw = _env_value(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.2.0"
CONTRACT_SCHEMA_VERSION = "1.0"

TOKEN_ENV_VAR = "MIRO_OAUTH_TOKEN"

VALID_ITEM_TYPES = {
    "sticky_note",
    "shape",
    "text",
    "image",
    "document",
    "card",
    "frame",
    "app_card",
    "embed",
}

VALID_STICKY_COLORS = {
    "gray",
    "light_yellow",
    "yellow",
    "orange",
    "light_green",
    "green",
    "dark_green",
    "cyan",
    "light_pink",
    "pink",
    "violet",
    "red",
    "light_blue",
    "blue",
    "dark_blue",
    "black",
}

BASIC_SHAPES = {
    "rectangle",
    "round_rectangle",
    "circle",
    "triangle",
    "rhombus",
    "parallelogram",
    "trapezoid",
    "pentagon",
    "hexagon",
    "octagon",
    "wedge_round_rectangle_callout",
    "star",
    "cloud",
    "cross",
    "can",
    "right_arrow",
    "left_arrow",
    "left_right_arrow",
    "left_brace",
    "right_brace",
}

FLOW_CHART_SHAPES = {
    "flow_chart_connector",
    "flow_chart_magnetic_disk",
    "flow_chart_input_output",
    "flow_chart_decision",
    "flow_chart_delay",
    "flow_chart_display",
    "flow_chart_document",
    "flow_chart_magnetic_drum",
    "flow_chart_internal_storage",
    "flow_chart_manual_input",
    "flow_chart_manual_operation",
    "flow_chart_merge",
    "flow_chart_multidocuments",
    "flow_chart_note_curly_left",
    "flow_chart_note_curly_right",
    "flow_chart_note_square",
    "flow_chart_offpage_connector",
    "flow_chart_or",
    "flow_chart_predefined_process",
    "flow_chart_preparation",
    "flow_chart_process",
    "flow_chart_online_data",
    "flow_chart_summing_junction",
    "flow_chart_terminator",
}

VALID_SHAPES = BASIC_SHAPES | FLOW_CHART_SHAPES

VALID_BORDER_STYLES = {"normal", "dotted", "dashed"}
VALID_TEXT_ALIGN = {"left", "center", "right"}
VALID_TEXT_ALIGN_VERTICAL = {"top", "middle", "bottom"}

DEFAULT_STICKY_COLOR = "yellow"
DEFAULT_SHAPE = "rectangle"
DEFAULT_SHAPE_WIDTH = 200
DEFAULT_SHAPE_HEIGHT = 200
DEFAULT_POSITION_ORIGIN = "center"

BULK_MAX_ITEMS = 20
ITEMS_PAGE_LIMIT = 50

# ---------------------------------------------------------------------------
# Module-level settings (process env, then .env)
# ---------------------------------------------------------------------------

env = load_env()

BASE_URL = (_env_value("MIRO_API_BASE_URL") or "https://api.miro.com/v2").rstrip("/")
HTTP_TIMEOUT_SECONDS = _env_int("MIRO_HTTP_TIMEOUT_SECONDS", 0)
HTTP_MAX_RESPONSE_BYTES = _env_int("MIRO_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("MIRO_HTTP_LOG", False)
HTTP_LOG_SAMPLE_RATE = min(1.0, max(0.0, _env_float("MIRO_HTTP_LOG_SAMPLE_RATE", 1.0)))
MCP_HOST = _env_value("MIRO_MCP_HOST") or "127.0.0.1"
MCP_PORT = _env_int("MIRO_MCP_PORT", 8808)


def resolve_token(cli_token=None):
    """Return the OAuth token: --token flag, then environment, then .env.

    Raises StartupConfigError when none of them is set.
    """
    token = (cli_token or "").strip() or (_env_value(TOKEN_ENV_VAR) or "").strip()
    if not token:
        raise StartupConfigError(
            "[SETUP_NEEDED] Miro OAuth token is required. Provide it via the "
            f"{TOKEN_ENV_VAR} environment variable or the --token argument."
        )
    return token
