"""Editor configuration stored as JSON in the user's home directory."""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields

from photostrip.constants import (
    ASSET_LOADER_WORKERS, CONFIG_DIR_NAME, CONFIG_FILE_NAME, DEFAULT_BRUSH_COLOR,
    DEFAULT_BRUSH_SIZE, DEFAULT_LAYOUT_KEY, DEFAULT_TEXT_SETTINGS,
)
from photostrip.utils.logger import loggerRaise

logger = logging.getLogger(__name__)


def default_config_path():
    return os.path.join(os.path.expanduser('~'), CONFIG_DIR_NAME, CONFIG_FILE_NAME)


@dataclass
class EditorConfig:
    """User defaults for new objects, drawing and asset loading."""
    text_style: dict = field(default_factory=lambda: dict(DEFAULT_TEXT_SETTINGS))
    brush_color: str = DEFAULT_BRUSH_COLOR
    brush_size: int = DEFAULT_BRUSH_SIZE
    photo_count: int = int(DEFAULT_LAYOUT_KEY)
    asset_workers: int = ASSET_LOADER_WORKERS

    @classmethod
    def from_dict(cls, data):
        """Build from a plain dict. Unknown keys are ignored, missing ones defaulted."""
        known = {f.name for f in fields(cls)}
        config = cls(**{k: v for k, v in data.items() if k in known})
        # Partial text styles fill in from the defaults
        config.text_style = {**DEFAULT_TEXT_SETTINGS, **(config.text_style or {})}
        return config

    def to_dict(self):
        return asdict(self)


def load_config(path=None):
    """Load the config file, or defaults if it does not exist yet."""
    path = path or default_config_path()
    if not os.path.exists(path):
        logger.debug("No config at %s, using defaults", path)
        return EditorConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be an object, got {type(data).__name__}")
        return EditorConfig.from_dict(data)
    except Exception as e:
        loggerRaise(e, "Error loading config")


def save_config(config, path=None):
    """Write config as JSON, creating the config directory if needed."""
    path = path or default_config_path()
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        logger.debug("Saved config to %s", path)
    except Exception as e:
        loggerRaise(e, "Error saving config")
