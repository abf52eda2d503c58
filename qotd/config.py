from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from common.utils import deep_merge


DEFAULT_CONFIG_PATH = "config/params.yaml"

DEFAULTS: Dict[str, Any] = {
    "quotes": {
        "base_url": "https://zenquotes.io/api",
        "mode": "today",
        "timeout_s": 8.0,
    },
    "layout": {},  # common.types.Layout defaults
    "fonts": {
        "header_path": None,
        "author_path": None,
        "quote_path": None,
    },
    "png": {"compress_level": 9},
    "server": {"host": "0.0.0.0", "port": 8787},
}


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Read YAML config and merge it over DEFAULTS.

    Path precedence: explicit `path`, env QOTD_CONFIG, config/params.yaml.
    A missing file is not an error; the defaults are returned as-is.
    """
    path = path or os.environ.get("QOTD_CONFIG") or DEFAULT_CONFIG_PATH
    if not Path(path).exists():
        return copy.deepcopy(DEFAULTS)
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config root must be a mapping: {path}")
    return deep_merge(copy.deepcopy(DEFAULTS), data)
