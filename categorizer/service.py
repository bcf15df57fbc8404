# categorizer/service.py
"""
Categorizer service: settings + category catalog + one owned model.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from categorizer.evaluation import EvaluationResult, train_test_split
from categorizer.model import TransactionCategorizer
from categorizer.persistence import load_model, save_model
from categorizer.settings import CategorizerSettings, load_settings
from stc_core.models import Category, DateLike, Prediction, Transaction
from stc_utils.datasets import read_transactions_csv

log = logging.getLogger("categorizer.service")

# Shorter descriptions are too ambiguous to suggest anything for.
MIN_DESCRIPTION_LENGTH = 3


class CategorizerService:
    """Categorize transactions with a model trained on labelled history."""

    def __init__(
        self,
        settings_path: Optional[str] = None,
        settings: Optional[CategorizerSettings] = None,
    ):
        self.settings = settings or load_settings(settings_path)
        self.model = TransactionCategorizer(self.settings)

    @property
    def categories(self) -> List[Category]:
        """Configured catalog, or the trained one when none is configured."""
        if self.settings.categories:
            return list(self.settings.categories)
        return list(self.model.categories)

    def train(
        self,
        transactions: Iterable[Transaction],
        categories: Optional[Iterable[Category]] = None,
    ) -> None:
        cats = list(categories) if categories is not None else self.settings.categories
        self.model.train(transactions, cats)

    def train_from_csv(
        self,
        path: Union[str, Path],
        categories: Optional[Iterable[Category]] = None,
    ) -> List[Transaction]:
        """Load a labelled CSV, train on it and return the rows used."""
        transactions = read_transactions_csv(path)
        self.train(transactions, categories)
        return transactions

    def categorize(self, description: str, date: DateLike = None) -> Optional[Prediction]:
        """
        Suggest a category, or None when the description is too short or no
        model is trained yet.
        """
        if not description or len(description.strip()) < MIN_DESCRIPTION_LENGTH:
            return None
        if not self.model.is_trained:
            log.debug("categorize() before training; no suggestion")
            return None
        return self.model.predict(description, date)

    def record_correction(
        self, description: str, actual_category_id: str, date: DateLike = None
    ) -> None:
        self.model.add_feedback(description, actual_category_id, date)

    def retrain(self, transactions: Iterable[Transaction]) -> None:
        self.model.retrain_with_feedback(transactions, self.categories)

    def evaluate(self, test_transactions: Iterable[Transaction]) -> EvaluationResult:
        return self.model.evaluate(test_transactions)

    def evaluate_split(
        self,
        transactions: Iterable[Transaction],
        test_fraction: float = 0.2,
        seed: Optional[int] = None,
    ) -> EvaluationResult:
        """Train on a shuffled share of `transactions` and score the rest."""
        train_set, test_set = train_test_split(transactions, test_fraction, seed)
        log.info("Split: %d train / %d test", len(train_set), len(test_set))
        self.train(train_set)
        return self.model.evaluate(test_set)

    def save(self, path: Union[str, Path]) -> Path:
        return save_model(self.model, path)

    def load(self, path: Union[str, Path]) -> None:
        self.model = load_model(path, self.settings)

    def get_category_count(self) -> int:
        return len(self.categories)
