# categorizer/__init__.py
"""
Transaction auto-categorization engine.

Learns description -> category from labelled history using a TF-IDF content
model, merchant pattern memory and a seasonal prior, and folds user
corrections back in on retrain.
"""

from .evaluation import (
    CategoryAccuracy,
    EvaluationResult,
    evaluate_predictions,
    train_test_split,
)
from .merchants import MerchantIndex, extract_merchant
from .model import ModelState, TransactionCategorizer
from .persistence import load_model, save_model
from .profiles import CategoryProfiles
from .seasonal import SeasonalIndex
from .service import CategorizerService
from .settings import CategorizerSettings, load_settings
from .vectorizer import TfIdfVectorizer

__all__ = [
    # Main classes
    "TransactionCategorizer",
    "CategorizerService",
    "CategorizerSettings",
    "ModelState",
    # Components
    "TfIdfVectorizer",
    "MerchantIndex",
    "SeasonalIndex",
    "CategoryProfiles",
    "extract_merchant",
    # Evaluation
    "CategoryAccuracy",
    "EvaluationResult",
    "evaluate_predictions",
    "train_test_split",
    # Settings / snapshots
    "load_settings",
    "load_model",
    "save_model",
]
