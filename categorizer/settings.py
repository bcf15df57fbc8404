# categorizer/settings.py
"""
Tunable constants for prediction fusion, loaded from YAML.

Example (config/categorizer.example.yaml):

    merchant_threshold: 0.8
    weights:
      merchant: 3
      content: 2
      seasonal: 1
    categories:
      - {id: cat-1, name: "Food & Dining", color: "#FF6384"}
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from stc_core.errors import CategorizerConfigError
from stc_core.models import Category

log = logging.getLogger("categorizer.settings")


@dataclass
class CategorizerSettings:
    # merchant predictions above this confidence skip fusion entirely
    merchant_threshold: float = 0.8
    merchant_weight: float = 3.0
    content_weight: float = 2.0
    seasonal_weight: float = 1.0
    categories: List[Category] = field(default_factory=list)


def _number(cfg: Dict[str, Any], key: str, default: float) -> float:
    raw = cfg.get(key, default)
    if isinstance(raw, bool):
        raise CategorizerConfigError(f"{key} must be a number, got {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise CategorizerConfigError(f"{key} must be a number, got {raw!r}") from None
    if value < 0:
        raise CategorizerConfigError(f"{key} must be >= 0, got {value}")
    return value


def _parse_categories(raw: Any) -> List[Category]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise CategorizerConfigError("categories must be a list")
    out: List[Category] = []
    for item in raw:
        if not isinstance(item, dict) or not str(item.get("id", "")).strip():
            raise CategorizerConfigError(f"category entry needs an id: {item!r}")
        cid = str(item["id"]).strip()
        out.append(
            Category(id=cid, name=str(item.get("name") or cid), color=item.get("color"))
        )
    return out


def settings_from_dict(cfg: Dict[str, Any]) -> CategorizerSettings:
    weights = cfg.get("weights") or {}
    if not isinstance(weights, dict):
        raise CategorizerConfigError("weights must be a mapping")

    defaults = CategorizerSettings()
    threshold = _number(cfg, "merchant_threshold", defaults.merchant_threshold)
    if threshold > 1:
        raise CategorizerConfigError(
            f"merchant_threshold must be within [0, 1], got {threshold}"
        )
    return CategorizerSettings(
        merchant_threshold=threshold,
        merchant_weight=_number(weights, "merchant", defaults.merchant_weight),
        content_weight=_number(weights, "content", defaults.content_weight),
        seasonal_weight=_number(weights, "seasonal", defaults.seasonal_weight),
        categories=_parse_categories(cfg.get("categories")),
    )


def load_settings(path: Optional[Union[str, Path]] = None) -> CategorizerSettings:
    """Read settings YAML; a missing path or file gives the defaults."""
    if not path:
        return CategorizerSettings()
    p = Path(path)
    if not p.exists():
        log.info("Settings file not found at %s; using built-in defaults.", p)
        return CategorizerSettings()
    with open(p, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise CategorizerConfigError(f"{p}: expected a mapping at top level")
    return settings_from_dict(cfg)
