# stc_core/errors.py
"""
Exceptions raised by the categorization engine.

Only precondition failures are raised to callers. Malformed records (bad
dates, empty merchants) are skipped where they are read.
"""
from __future__ import annotations


class NotTrainedError(RuntimeError):
    """predict() was called before any successful train()."""

    def __init__(self, message: str = "Model has not been trained yet"):
        super().__init__(message)


class UnknownCategoryError(ValueError):
    """A category id is not part of the known category catalog."""

    def __init__(self, category_id: str):
        super().__init__(f"Unknown category id: {category_id!r}")
        self.category_id = category_id


class CategorizerConfigError(ValueError):
    """Settings file present but holding invalid values."""
