"""Load presentation options from a JSON file."""

import json
import logging
import os
from dataclasses import fields, replace

from mdplayscript.constants import OPTIONS_SUFFIX
from mdplayscript.models import Options

logger = logging.getLogger(__name__)


def sidecar_path(input_path: str) -> str:
    """Options file that sits next to a play script.

    "plays/figaro.md" → "plays/figaro.playscript.json"
    """
    return os.path.splitext(input_path)[0] + OPTIONS_SUFFIX


def options_from_dict(data: dict) -> Options:
    """Build Options from a mapping, rejecting unknown keys and bad types."""
    known = {f.name for f in fields(Options)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown option(s): {', '.join(unknown)}")

    for key, value in data.items():
        if key == "heading_level":
            if not isinstance(value, int) or isinstance(value, bool) or not 1 <= value <= 6:
                raise ValueError(f"heading_level must be an integer from 1 to 6, got {value!r}")
        elif key == "replace_softbreak":
            if value is not None and not isinstance(value, str):
                raise ValueError(f"replace_softbreak must be a string or null, got {value!r}")
        elif not isinstance(value, str) or not value:
            raise ValueError(f"{key} must be a non-empty string, got {value!r}")
    return replace(Options(), **data)


def load_options(path: str) -> Options:
    """Load Options from a JSON file.

    Missing or malformed files give the defaults.
    """
    if not os.path.exists(path):
        return Options()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError:
        logger.warning("Malformed options file: %s, using defaults", path)
        return Options()
    if not isinstance(data, dict):
        logger.warning("Options file is not a JSON object: %s, using defaults", path)
        return Options()
    return options_from_dict(data)
