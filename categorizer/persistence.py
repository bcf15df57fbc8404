# categorizer/persistence.py
"""
Save / load a trained model snapshot as JSON.

Only derived state is written (catalog, vocabulary, document frequencies,
category profiles, merchant and seasonal indices). Pending feedback is not.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np

from categorizer.merchants import MerchantIndex
from categorizer.model import ModelState, TransactionCategorizer
from categorizer.profiles import CategoryProfiles
from categorizer.seasonal import SeasonalIndex
from categorizer.settings import CategorizerSettings
from categorizer.vectorizer import TfIdfVectorizer
from stc_core.models import Category, CategoryCatalog

log = logging.getLogger("categorizer.persistence")

FORMAT_VERSION = 1


def state_to_dict(state: ModelState) -> Dict[str, Any]:
    vec = state.vectorizer
    return {
        "format_version": FORMAT_VERSION,
        "saved_at": datetime.now().isoformat(timespec="seconds"),
        "training_size": state.training_size,
        "categories": [asdict(c) for c in state.catalog],
        "vectorizer": {
            "vocabulary": vec.vocabulary,
            "document_frequencies": vec.document_frequencies,
            "total_documents": vec.total_documents,
        },
        "profiles": {
            "category_ids": state.profiles.category_ids,
            "means": state.profiles.means.tolist(),
            "priors": state.profiles.priors.tolist(),
        },
        "merchants": state.merchants.counts,
        "seasonal": state.seasonal.profiles,
    }


def state_from_dict(data: Dict[str, Any]) -> ModelState:
    version = data.get("format_version")
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported model format version: {version!r}")

    vec_data = data["vectorizer"]
    vectorizer = TfIdfVectorizer.from_state(
        vec_data["vocabulary"],
        vec_data["document_frequencies"],
        vec_data["total_documents"],
    )

    prof = data["profiles"]
    means = np.asarray(prof["means"], dtype=np.float64)
    if means.ndim != 2:
        # no profiles at all: json gives [] which loads as shape (0,)
        means = means.reshape(len(prof["category_ids"]), vectorizer.vocabulary_size)
    profiles = CategoryProfiles(
        prof["category_ids"], means, np.asarray(prof["priors"], dtype=np.float64)
    )

    return ModelState(
        catalog=CategoryCatalog(Category(**c) for c in data["categories"]),
        vectorizer=vectorizer,
        profiles=profiles,
        merchants=MerchantIndex(
            {m: dict(cats) for m, cats in data["merchants"].items()}
        ),
        seasonal=SeasonalIndex(
            {cid: [float(x) for x in slots] for cid, slots in data["seasonal"].items()}
        ),
        training_size=int(data.get("training_size", 0)),
    )


def save_model(model: TransactionCategorizer, path: Union[str, Path]) -> Path:
    """Write the model's current state; raises NotTrainedError if untrained."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    payload = state_to_dict(model.state)
    with p.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False)
    log.info("Saved model (%d categories) to %s", len(model.state.catalog), p)
    return p


def load_model(
    path: Union[str, Path], settings: Optional[CategorizerSettings] = None
) -> TransactionCategorizer:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Model not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)

    model = TransactionCategorizer(settings)
    model.load_state(state_from_dict(data))
    log.debug("Loaded model from %s", p)
    return model
