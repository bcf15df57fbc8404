# categorizer/merchants.py
"""
Merchant pattern memory: which categories a merchant was filed under.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from stc_core.models import Prediction, Transaction
from stc_utils.text import safe_divide

log = logging.getLogger("categorizer.merchants")

# Checked in this order; the first one present in the description is used.
MERCHANT_SEPARATORS = (" - ", "/", "payment to", "purchase at", "txn*")
MAX_MERCHANT_WORDS = 3


def extract_merchant(description: Optional[str]) -> Optional[str]:
    """
    Canonical merchant key for a description.

    "Amazon - order 123" -> "amazon"; "payment to Airtel" -> "airtel";
    "Coffee at Starbucks downtown" -> "coffee at starbucks".
    """
    cleaned = (description or "").lower().strip()
    if not cleaned:
        return None

    for sep in MERCHANT_SEPARATORS:
        if sep in cleaned:
            parts = cleaned.split(sep)
            merchant = parts[0].strip() or parts[1].strip()
            return merchant or None

    words = cleaned.split()
    return " ".join(words[:MAX_MERCHANT_WORDS]) or None


class MerchantIndex:
    """merchant -> {category_id: occurrences}, categories in first-seen order."""

    def __init__(self, counts: Optional[Dict[str, Dict[str, int]]] = None):
        self.counts: Dict[str, Dict[str, int]] = counts or {}

    @classmethod
    def build(cls, transactions: Iterable[Transaction]) -> "MerchantIndex":
        counts: Dict[str, Dict[str, int]] = {}
        skipped = 0
        for txn in transactions:
            merchant = extract_merchant(txn.description)
            if not merchant:
                skipped += 1
                continue
            per_cat = counts.setdefault(merchant, {})
            per_cat[txn.category_id] = per_cat.get(txn.category_id, 0) + 1
        if skipped:
            log.debug("%d transaction(s) without an extractable merchant", skipped)
        return cls(counts)

    def __len__(self) -> int:
        return len(self.counts)

    def __contains__(self, merchant: object) -> bool:
        return merchant in self.counts

    def predict(self, description: str) -> Optional[Prediction]:
        merchant = extract_merchant(description)
        if not merchant:
            return None
        per_cat = self.counts.get(merchant)
        if not per_cat:
            return None

        best_id = ""
        best_count = 0
        total = 0
        for category_id, count in per_cat.items():
            total += count
            # strict > keeps the first-seen category on ties
            if count > best_count:
                best_id, best_count = category_id, count

        return Prediction(category_id=best_id, confidence=safe_divide(best_count, total))
