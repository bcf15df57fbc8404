# categorizer/seasonal.py
"""
Per-category month distribution used as a weak seasonal prior.

Each category seen in training gets 12 slots (0 = January). Slots are
normalized to sum to 1.0; a category with no usable dates stays all-zero.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from stc_core.models import DateLike, Transaction
from stc_utils.normalizers import parse_date
from stc_utils.text import safe_divide

log = logging.getLogger("categorizer.seasonal")

MONTHS_PER_YEAR = 12


class SeasonalIndex:
    def __init__(self, profiles: Optional[Dict[str, List[float]]] = None):
        self.profiles: Dict[str, List[float]] = profiles or {}

    @classmethod
    def build(cls, transactions: Iterable[Transaction]) -> "SeasonalIndex":
        counts: Dict[str, List[float]] = {}
        bad_dates = 0
        for txn in transactions:
            slots = counts.setdefault(txn.category_id, [0.0] * MONTHS_PER_YEAR)
            if txn.date is None or txn.date == "":
                continue
            parsed = parse_date(txn.date)
            if parsed is None:
                bad_dates += 1
                continue
            slots[parsed.month - 1] += 1

        if bad_dates:
            log.debug("Skipped %d unparseable date(s) in seasonal index", bad_dates)

        profiles: Dict[str, List[float]] = {}
        for category_id, slots in counts.items():
            total = sum(slots)
            profiles[category_id] = [safe_divide(c, total) for c in slots]
        return cls(profiles)

    def __len__(self) -> int:
        return len(self.profiles)

    def profile(self, category_id: str) -> Optional[List[float]]:
        return self.profiles.get(category_id)

    def boost(self, when: DateLike) -> Dict[str, float]:
        """Factor for the month of `when`, per category; {} if it won't parse."""
        parsed = parse_date(when)
        if parsed is None:
            return {}
        month = parsed.month - 1
        return {cid: slots[month] for cid, slots in self.profiles.items()}
