# stc_core/__init__.py
"""
Core types shared by the categorizer, CLI and dataset loaders.
"""

from .errors import CategorizerConfigError, NotTrainedError, UnknownCategoryError
from .models import Category, CategoryCatalog, Feedback, Prediction, Transaction

__all__ = [
    "Category",
    "CategoryCatalog",
    "Feedback",
    "Prediction",
    "Transaction",
    "CategorizerConfigError",
    "NotTrainedError",
    "UnknownCategoryError",
]
