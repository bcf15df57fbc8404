# categorizer/model.py
"""
Transaction categorizer: merchant memory + TF-IDF content model + seasonal prior.

Lifecycle: create -> train -> predict / evaluate -> (add_feedback ->
retrain_with_feedback) -> discard. Each train() builds a fresh ModelState
and publishes it with one assignment, so a predict() running alongside sees
either the old state or the new one, never a mix. train() and
retrain_with_feedback() are serialized by one reentrant lock; predictions
take no lock.
"""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from categorizer.evaluation import EvaluationResult, evaluate_predictions
from categorizer.merchants import MerchantIndex
from categorizer.profiles import CategoryProfiles
from categorizer.seasonal import SeasonalIndex
from categorizer.settings import CategorizerSettings
from categorizer.vectorizer import TfIdfVectorizer
from stc_core.errors import NotTrainedError
from stc_core.models import (
    Category,
    CategoryCatalog,
    DateLike,
    Feedback,
    Prediction,
    Transaction,
)
from stc_utils.text import safe_divide

log = logging.getLogger("categorizer.model")


@dataclass(frozen=True)
class ModelState:
    """
    Everything derived from one training pass.

    train() always builds a new state and never touches a published one. The
    components themselves are plain mutable objects; callers holding
    `model.state` must treat them as read-only.
    """

    catalog: CategoryCatalog
    vectorizer: TfIdfVectorizer
    profiles: CategoryProfiles
    merchants: MerchantIndex
    seasonal: SeasonalIndex
    training_size: int


def build_state(transactions: List[Transaction], catalog: CategoryCatalog) -> ModelState:
    descriptions = [t.description for t in transactions]
    labels = [t.category_id for t in transactions]

    vectorizer = TfIdfVectorizer()
    vectors = vectorizer.fit_transform(descriptions)
    return ModelState(
        catalog=catalog,
        vectorizer=vectorizer,
        profiles=CategoryProfiles.build(vectors, labels, catalog),
        merchants=MerchantIndex.build(transactions),
        seasonal=SeasonalIndex.build(transactions),
        training_size=len(transactions),
    )


class TransactionCategorizer:
    def __init__(self, settings: Optional[CategorizerSettings] = None):
        self.settings = settings or CategorizerSettings()
        self._state: Optional[ModelState] = None
        self._train_lock = threading.RLock()
        self._feedback: List[Feedback] = []
        self._feedback_lock = threading.Lock()

    # ------------------------------------------------------------------ state

    @property
    def is_trained(self) -> bool:
        return self._state is not None

    @property
    def state(self) -> ModelState:
        state = self._state
        if state is None:
            raise NotTrainedError()
        return state

    @property
    def categories(self) -> CategoryCatalog:
        """Catalog of the last successful train (empty before that)."""
        state = self._state
        return state.catalog if state is not None else CategoryCatalog()

    @property
    def pending_feedback(self) -> List[Feedback]:
        with self._feedback_lock:
            return list(self._feedback)

    def load_state(self, state: ModelState) -> None:
        """Publish a state built elsewhere (e.g. read back from disk)."""
        with self._train_lock:
            self._state = state

    # --------------------------------------------------------------- training

    def train(
        self, transactions: Iterable[Transaction], categories: Iterable[Category]
    ) -> None:
        """
        Rebuild every index from `transactions`.

        An empty list is a no-op. With an empty `categories` list the catalog
        is taken from the training labels. Transactions labelled outside the
        catalog are skipped.
        """
        self._train(transactions, categories)

    def _train(
        self, transactions: Iterable[Transaction], categories: Iterable[Category]
    ) -> bool:
        txns = list(transactions)
        if not txns:
            log.info("train() called with no transactions; keeping current model")
            return False

        cats = list(categories)
        if cats:
            catalog = CategoryCatalog(cats)
        else:
            catalog = CategoryCatalog.from_labels(t.category_id for t in txns)

        usable = [t for t in txns if t.category_id in catalog]
        if len(usable) < len(txns):
            log.warning(
                "Skipped %d transaction(s) labelled with unknown categories",
                len(txns) - len(usable),
            )
        if not usable:
            log.warning("No transaction matches the category catalog; keeping current model")
            return False

        with self._train_lock:
            state = build_state(usable, catalog)
            self._state = state

        log.info(
            "Trained on %d transaction(s): %d categories, vocabulary=%d, merchants=%d",
            state.training_size,
            len(state.profiles),
            state.vectorizer.vocabulary_size,
            len(state.merchants),
        )
        return True

    # ------------------------------------------------------------- prediction

    def predict(self, description: str, date: DateLike = None) -> Prediction:
        return self._predict(self.state, description, date)

    def predict_by_merchant(self, description: str) -> Optional[Prediction]:
        return self.state.merchants.predict(description)

    def predict_by_content(self, description: str) -> Prediction:
        state = self.state
        return _content_prediction(state, description)

    def seasonal_boost(self, date: DateLike) -> Dict[str, float]:
        return self.state.seasonal.boost(date)

    def _predict(self, state: ModelState, description: str, date: DateLike) -> Prediction:
        s = self.settings

        merchant = state.merchants.predict(description)
        if merchant is not None and merchant.confidence > s.merchant_threshold:
            return merchant

        content = _content_prediction(state, description)
        boost = state.seasonal.boost(date) if date else {}

        fused: Dict[str, float] = {cid: 0.0 for cid in state.catalog.ids}
        if merchant is not None:
            fused[merchant.category_id] = (
                fused.get(merchant.category_id, 0.0) + merchant.confidence * s.merchant_weight
            )
        fused[content.category_id] = (
            fused.get(content.category_id, 0.0) + content.confidence * s.content_weight
        )
        for category_id, factor in boost.items():
            fused[category_id] = fused.get(category_id, 0.0) + factor * s.seasonal_weight

        best_id = ""
        best_score = float("-inf")
        for category_id, score in fused.items():
            if score > best_score:
                best_id, best_score = category_id, score

        total = sum(max(0.0, score) for score in fused.values())
        if total > 0:
            confidence = min(1.0, safe_divide(max(0.0, best_score), total))
        else:
            confidence = content.confidence

        return Prediction(category_id=best_id or content.category_id, confidence=confidence)

    # --------------------------------------------------------------- feedback

    def add_feedback(
        self, description: str, actual_category_id: str, date: DateLike = None
    ) -> None:
        """Queue a correction; it takes effect on the next retrain_with_feedback()."""
        state = self._state
        if state is not None:
            state.catalog.require(actual_category_id)
        with self._feedback_lock:
            self._feedback.append(Feedback(description, actual_category_id, date))
        log.debug("Queued feedback %r -> %s", description, actual_category_id)

    def retrain_with_feedback(
        self, transactions: Iterable[Transaction], categories: Iterable[Category]
    ) -> None:
        # drain, train and clear as one step so overlapping retrains never
        # consume the same entries twice
        with self._train_lock:
            self._retrain_with_feedback(transactions, categories)

    def _retrain_with_feedback(
        self, transactions: Iterable[Transaction], categories: Iterable[Category]
    ) -> None:
        with self._feedback_lock:
            drained = list(self._feedback)
        if not drained:
            return

        now = datetime.now().isoformat()
        pseudo = [
            Transaction(
                id=f"feedback-{uuid.uuid4().hex[:12]}",
                date=fb.date or now,
                description=fb.description,
                amount=0.0,
                category_id=fb.actual_category_id,
                user_id="feedback",
            )
            for fb in drained
        ]

        if not self._train([*transactions, *pseudo], categories):
            log.warning("Retrain with %d feedback item(s) did not run; queue kept", len(drained))
            return

        with self._feedback_lock:
            # entries queued while training stay for the next retrain
            del self._feedback[: len(drained)]
        log.info("Retrained with %d feedback item(s)", len(drained))

    # ------------------------------------------------------------- evaluation

    def evaluate(self, test_transactions: Iterable[Transaction]) -> EvaluationResult:
        state = self._state
        txns = list(test_transactions)
        if state is None or not txns:
            return EvaluationResult()
        return evaluate_predictions(
            lambda description, date: self._predict(state, description, date),
            state.catalog.ids,
            txns,
        )


def _content_prediction(state: ModelState, description: str) -> Prediction:
    vector = state.vectorizer.transform_one(description)
    fallback = state.catalog.ids[0] if len(state.catalog) else ""
    return state.profiles.predict(vector, fallback_id=fallback)
