# -------------------------------------
# hostexpand config loader
# -------------------------------------
"""
YAML configuration for the hostexpand command line.

A config file is a flat mapping; every key is optional:

    max_size: 100000   # refuse expansions larger than this, 0 = unlimited
    separator: "\\n"    # joins expanded names on stdout
"""
from pathlib import Path
from typing import Any

import yaml


DEFAULTS: dict[str, Any] = {
    "max_size": 0,
    "separator": "\n",
}

# Module-level cache for loaded config files
_CONFIG_CACHE: dict[str, dict[str, Any]] = {}


def _check(data: Any, path: Path) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"config '{path}' must be a mapping, got {type(data).__name__}")

    unknown = sorted(set(data) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"config '{path}' has unknown keys: {', '.join(map(str, unknown))}")

    max_size = data.get("max_size", 0)
    if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size < 0:
        raise ValueError(f"config '{path}': max_size must be an integer >= 0, got {max_size!r}")

    sep = data.get("separator", "\n")
    if not isinstance(sep, str):
        raise ValueError(f"config '{path}': separator must be a string, got {sep!r}")
    return data


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Load a config file and return it merged over DEFAULTS.

    Args:
        path: Path to the YAML file

    Returns:
        Dict with every key of DEFAULTS

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If a key is unknown or has the wrong type
    """
    path = Path(path)
    path_str = str(path.resolve())

    if path_str in _CONFIG_CACHE:
        return dict(_CONFIG_CACHE[path_str])

    with open(path, "r", encoding="utf-8") as f:
        data = _check(yaml.safe_load(f), path)

    cfg = dict(DEFAULTS)
    cfg.update(data)
    _CONFIG_CACHE[path_str] = cfg
    return dict(cfg)


def clear_cache() -> None:
    """Clear the config file cache."""
    _CONFIG_CACHE.clear()
