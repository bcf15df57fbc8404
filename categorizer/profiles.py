# categorizer/profiles.py
"""
Content model: one mean TF-IDF vector and one prior per category.

Scoring is dot(input, mean) * prior. Rows are kept in catalog order, which
is also the tie-break order (np.argmax returns the first maximum).
"""
from __future__ import annotations

from typing import Dict, List, Sequence

import numpy as np

from stc_core.models import CategoryCatalog, Prediction
from stc_utils.text import safe_divide


class CategoryProfiles:
    def __init__(self, category_ids: List[str], means: np.ndarray, priors: np.ndarray):
        self.category_ids = list(category_ids)
        self.means = means
        self.priors = priors

    @classmethod
    def build(
        cls, vectors: np.ndarray, labels: Sequence[str], catalog: CategoryCatalog
    ) -> "CategoryProfiles":
        total = len(labels)
        label_arr = np.asarray(labels, dtype=object)

        ids: List[str] = []
        means: List[np.ndarray] = []
        priors: List[float] = []
        for category_id in catalog.ids:
            mask = label_arr == category_id
            count = int(mask.sum())
            if count == 0:
                continue
            ids.append(category_id)
            means.append(vectors[mask].mean(axis=0))
            priors.append(safe_divide(count, total))

        width = vectors.shape[1] if vectors.ndim == 2 else 0
        return cls(
            ids,
            np.vstack(means) if means else np.zeros((0, width)),
            np.asarray(priors, dtype=np.float64),
        )

    def __len__(self) -> int:
        return len(self.category_ids)

    def prior(self, category_id: str) -> float:
        try:
            return float(self.priors[self.category_ids.index(category_id)])
        except ValueError:
            return 0.0

    def mean_vector(self, category_id: str) -> np.ndarray:
        return self.means[self.category_ids.index(category_id)]

    def scores(self, vector: np.ndarray) -> Dict[str, float]:
        raw = (self.means @ vector) * self.priors
        return dict(zip(self.category_ids, raw.tolist()))

    def predict(self, vector: np.ndarray, fallback_id: str = "") -> Prediction:
        if not self.category_ids:
            return Prediction(category_id=fallback_id, confidence=0.0)

        scores = (self.means @ vector) * self.priors
        best = int(np.argmax(scores))
        best_score = float(scores[best])

        if best_score == 0:
            # no vocabulary overlap with any category: priors alone decide
            best = int(np.argmax(self.priors))
            best_score = float(self.priors[best])

        total = float(np.clip(scores, 0, None).sum())
        confidence = safe_divide(max(0.0, best_score), total)
        return Prediction(
            category_id=self.category_ids[best] or fallback_id,
            confidence=min(1.0, confidence),
        )
