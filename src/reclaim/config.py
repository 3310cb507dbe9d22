"""JSON-backed defaults for AnalysisConfig."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from reclaim.models import AnalysisConfig

log = logging.getLogger(__name__)

_CONFIG_DIR = "reclaim"
_CONFIG_FILE = "config.json"


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def config_path() -> Path:
    """Location of the user configuration file."""
    return xdg_config_home() / _CONFIG_DIR / _CONFIG_FILE


def load_config(path: Path | None = None, **overrides: Any) -> AnalysisConfig:
    """
    Load analysis defaults from disk.

    Unknown keys are ignored. A missing file gives the built-in defaults; an
    unreadable or invalid file is logged and also gives the defaults.

    Args:
        path: Config file to read (default: config_path())
        **overrides: Values that take precedence over the file, None values
            are ignored (convenient for unset CLI options)

    Returns:
        AnalysisConfig
    """
    path = path or config_path()
    data: dict[str, Any] = {}

    if path.exists():
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load config from %s: %s", path, e)
        else:
            if isinstance(loaded, dict):
                data = {k: v for k, v in loaded.items() if k in AnalysisConfig.model_fields}
            else:
                log.warning("Ignoring config %s: expected a JSON object", path)

    try:
        base = AnalysisConfig(**data)
    except ValidationError as e:
        log.warning("Invalid values in %s, using defaults: %s", path, e)
        base = AnalysisConfig()

    updates = {k: v for k, v in overrides.items() if v is not None}
    if not updates:
        return base
    return AnalysisConfig(**{**base.model_dump(), **updates})
