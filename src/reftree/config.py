"""
Global Configuration and Defaults.

Module-level constants hold the defaults used by the renderer and the CLI.
`load_settings` layers `.reftree/config.yaml` and environment variables on
top of them.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

# --- Rendering ---
# Depth shown when nothing else is configured
DEFAULT_MAX_DEPTH = 5

# Bounds of the interactive depth selector
MIN_MAX_DEPTH = 1
MAX_MAX_DEPTH = 10

# Rows shallower than this start expanded
AUTO_EXPAND_DEPTH = 2

# --- Locations ---
STATE_DIR = Path(".reftree")
DEFAULT_INDEX_PATH = STATE_DIR / "index.json"
DEFAULT_SESSION_PATH = STATE_DIR / "session.json"
DEFAULT_CONFIG_PATH = STATE_DIR / "config.yaml"

# --- Environment overrides ---
ENV_INDEX_PATH = "REFTREE_INDEX"
ENV_REBUILD_COMMAND = "REFTREE_REBUILD_COMMAND"


class Settings(BaseModel):
    """User-tunable settings."""
    index_path: Path = DEFAULT_INDEX_PATH
    session_path: Path = DEFAULT_SESSION_PATH
    max_depth: int = DEFAULT_MAX_DEPTH
    rebuild_command: Optional[str] = None


def clamp_depth(value: int) -> int:
    """Clamp a depth into the selector range."""
    return max(MIN_MAX_DEPTH, min(MAX_MAX_DEPTH, value))


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Load settings from YAML, then apply environment overrides.

    A missing file is normal. An unreadable or invalid file is logged and
    ignored so the CLI still runs with defaults.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    data: dict = {}

    if path.exists():
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable config {path}: {e}")
            data = {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {path}: expected a mapping")
            data = {}

    if os.getenv(ENV_INDEX_PATH):
        data["index_path"] = os.environ[ENV_INDEX_PATH]
    if os.getenv(ENV_REBUILD_COMMAND):
        data["rebuild_command"] = os.environ[ENV_REBUILD_COMMAND]

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Invalid config {path}, using defaults: {e}")
        return Settings()

    settings.max_depth = clamp_depth(settings.max_depth)
    return settings
