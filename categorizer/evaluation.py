# categorizer/evaluation.py
"""
Accuracy metrics and train/test splitting.

Per-category tallies are keyed by the actual label, not the predicted one.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from stc_core.models import CategoryCatalog, DateLike, Prediction, Transaction
from stc_utils.text import safe_divide

PredictFn = Callable[[str, DateLike], Prediction]


@dataclass
class CategoryAccuracy:
    correct: int = 0
    total: int = 0

    @property
    def accuracy(self) -> float:
        return safe_divide(self.correct, self.total)


@dataclass
class EvaluationResult:
    accuracy: float = 0.0
    correct: int = 0
    total: int = 0
    per_category: Dict[str, CategoryAccuracy] = field(default_factory=dict)

    def ranked(self, min_total: int = 2) -> List[Tuple[str, CategoryAccuracy]]:
        """Best to worst; categories with fewer than min_total samples are left out."""
        rows = [
            (cid, stats)
            for cid, stats in self.per_category.items()
            if stats.total > 0 and stats.total >= min_total
        ]
        # sorted() is stable, so equal accuracies keep catalog order
        return sorted(rows, key=lambda r: r[1].accuracy, reverse=True)

    def to_frame(self, catalog: Optional[CategoryCatalog] = None) -> pd.DataFrame:
        records = []
        for cid, stats in self.per_category.items():
            cat = catalog.get(cid) if catalog is not None else None
            records.append(
                {
                    "category_id": cid,
                    "name": cat.name if cat else cid,
                    "correct": stats.correct,
                    "total": stats.total,
                    "accuracy": stats.accuracy,
                }
            )
        return pd.DataFrame(
            records, columns=["category_id", "name", "correct", "total", "accuracy"]
        )


def evaluate_predictions(
    predict: PredictFn,
    catalog_ids: Sequence[str],
    test_transactions: Iterable[Transaction],
) -> EvaluationResult:
    """
    Run predict over every transaction and tally hits.

    Every catalog category is reported (total 0 -> accuracy 0), followed by
    any actual label that is not in the catalog.
    """
    txns = list(test_transactions)
    if not txns:
        return EvaluationResult()

    per_category: Dict[str, CategoryAccuracy] = {
        cid: CategoryAccuracy() for cid in catalog_ids
    }
    correct = 0
    for txn in txns:
        predicted = predict(txn.description, txn.date)
        stats = per_category.setdefault(txn.category_id, CategoryAccuracy())
        stats.total += 1
        if predicted.category_id == txn.category_id:
            stats.correct += 1
            correct += 1

    return EvaluationResult(
        accuracy=safe_divide(correct, len(txns)),
        correct=correct,
        total=len(txns),
        per_category=per_category,
    )


def train_test_split(
    transactions: Iterable[Transaction],
    test_fraction: float = 0.2,
    seed: Optional[int] = None,
) -> Tuple[List[Transaction], List[Transaction]]:
    """Shuffle a copy and split it; the train side gets floor(n * (1 - test_fraction))."""
    if not 0 <= test_fraction <= 1:
        raise ValueError(f"test_fraction must be within [0, 1], got {test_fraction}")
    shuffled = list(transactions)
    random.Random(seed).shuffle(shuffled)
    split_at = int(len(shuffled) * (1 - test_fraction))
    return shuffled[:split_at], shuffled[split_at:]
