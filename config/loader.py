# config/loader.py
from __future__ import annotations
import copy
from pathlib import Path
from typing import Any, Dict

# Python 3.11 has tomllib; fall back to "tomli" on older versions if needed
try:
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

REPO = Path(__file__).resolve().parents[1]

DEFAULTS: Dict[str, Any] = {
    "paths": {
        "model": "data/models/categorizer.json",
        "settings": "config/categorizer.example.yaml",
        "data": "data/samples/transactions.csv",
    },
    "logging": {"level": "INFO"},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_config(config_path: Path | None = None) -> Dict[str, Any]:
    """
    Load config.toml from repo root by default, layered over DEFAULTS.

    A missing default config.toml just yields DEFAULTS; an explicit path
    that does not exist is an error.
    """
    if config_path is None:
        config_path = REPO / "config.toml"
        if not config_path.exists():
            return copy.deepcopy(DEFAULTS)

    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with config_path.open("rb") as f:
        return _merge(DEFAULTS, tomllib.load(f))


def resolve_path(value: str | Path) -> Path:
    """Relative paths in the config are relative to the repo root."""
    p = Path(value)
    return p if p.is_absolute() else REPO / p
