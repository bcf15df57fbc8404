# stc_utils/datasets.py
"""
CSV loaders for labeled transactions and category catalogs.

Transactions CSV columns: id, date, description, amount, category_id, user_id.
Only description and category_id are required; a missing id becomes the row
number and a missing amount becomes 0.0.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

from stc_core.models import Category, Transaction

log = logging.getLogger("stc_utils.datasets")

REQUIRED_TRANSACTION_COLUMNS = ("description", "category_id")


def _clean(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def read_transactions_csv(path: Union[str, Path]) -> List[Transaction]:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [c.strip().lower() for c in df.columns]

    missing = [c for c in REQUIRED_TRANSACTION_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing column(s) {', '.join(missing)}")

    out: List[Transaction] = []
    for row_no, row in enumerate(df.to_dict(orient="records"), start=1):
        category_id = _clean(row.get("category_id"))
        if not category_id:
            log.warning("%s row %d has no category_id; skipped", path, row_no)
            continue
        amount = pd.to_numeric(row.get("amount", ""), errors="coerce")
        out.append(
            Transaction(
                id=_clean(row.get("id")) or str(row_no),
                date=_clean(row.get("date")) or None,
                description=_clean(row.get("description")),
                amount=0.0 if pd.isna(amount) else float(amount),
                category_id=category_id,
                user_id=_clean(row.get("user_id")),
            )
        )
    log.debug("Loaded %d transaction(s) from %s", len(out), path)
    return out


def read_categories_csv(path: Union[str, Path]) -> List[Category]:
    """Columns: id, name, color (color optional)."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [c.strip().lower() for c in df.columns]
    if "id" not in df.columns:
        raise ValueError(f"{path}: missing column id")

    out: List[Category] = []
    for row in df.to_dict(orient="records"):
        cid = _clean(row.get("id"))
        if not cid:
            continue
        out.append(
            Category(
                id=cid,
                name=_clean(row.get("name")) or cid,
                color=_clean(row.get("color")) or None,
            )
        )
    return out
