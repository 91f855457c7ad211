# config.py
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .errors import ConfigReadError, InvalidConfigError
from .models import FontSignature

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

# --- Outline Logic ---
# Root (document title) plus this many heading levels.
MAX_LEVEL = 3

# --- Reading Order ---
# Baselines closer than this (points) are treated as one line when
# characters are put into reading order.
LINE_TOLERANCE = 0.5

METADATA_KEYS = ("title", "author", "subject", "keywords")


@dataclass
class FinishConfig:
    """Parsed configuration file. None means "leave the field untouched"."""
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    keywords: Optional[str] = None
    signatures: Optional[List[FontSignature]] = field(default=None)

    @property
    def toc_enabled(self) -> bool:
        return self.signatures is not None

    def metadata(self) -> Dict[str, str]:
        """Only the metadata fields present in the config."""
        values = {key: getattr(self, key) for key in METADATA_KEYS}
        return {key: value for key, value in values.items() if value is not None}


def load_json(path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def _is_number(value) -> bool:
    # bool is an int subclass
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_signature(index: int, item) -> FontSignature:
    if not isinstance(item, dict):
        raise InvalidConfigError("entry must be an object", index)

    for key in ("font", "size", "level"):
        if key not in item:
            raise InvalidConfigError(f"missing required field '{key}'", index)

    font, size, level = item["font"], item["size"], item["level"]
    if not isinstance(font, str) or not font:
        raise InvalidConfigError("'font' must be a non-empty string", index)
    if not _is_number(size) or size <= 0:
        raise InvalidConfigError(f"'size' must be a number > 0, got {size!r}", index)
    if isinstance(level, float) and level.is_integer():
        level = int(level)
    if not isinstance(level, int) or isinstance(level, bool) or level < 1:
        raise InvalidConfigError(f"'level' must be an integer >= 1, got {level!r}", index)

    return FontSignature(name=font, size=float(size), level=level)


def parse_config(data) -> FinishConfig:
    """Validate decoded JSON and build a FinishConfig."""
    if not isinstance(data, dict):
        raise InvalidConfigError("configuration must be a JSON object")

    config = FinishConfig()
    for key in METADATA_KEYS:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise InvalidConfigError(f"'{key}' must be a string")
        setattr(config, key, value)

    headings = data.get("toc")
    if headings is not None:
        if not isinstance(headings, list):
            raise InvalidConfigError("'toc' must be an array")
        config.signatures = [_parse_signature(i, item) for i, item in enumerate(headings)]

    return config


def load_config(path) -> FinishConfig:
    """Read and validate the JSON configuration file."""
    path = Path(path)
    try:
        data = load_json(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(f"Error reading configuration file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigReadError(f"Configuration file {path} is not valid JSON: {exc}") from exc

    config = parse_config(data)
    if config.toc_enabled:
        logger.debug(f"Loaded {len(config.signatures)} heading signature(s) from {path.name}")
    return config
