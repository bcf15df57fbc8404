from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional, Union

from .errors import UnknownCategoryError

DateLike = Union[str, date, None]


@dataclass
class Transaction:
    id: str
    date: DateLike
    description: str
    amount: float
    category_id: str
    user_id: str = ""


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    # display only
    color: Optional[str] = None


@dataclass
class Prediction:
    category_id: str
    confidence: float = 0.0

    @property
    def confidence_level(self) -> str:
        """Coarse bucket used when showing a suggestion to the user."""
        if self.confidence > 0.8:
            return "high"
        if self.confidence > 0.5:
            return "medium"
        return "low"


@dataclass
class Feedback:
    description: str
    actual_category_id: str
    date: DateLike = None


class CategoryCatalog:
    """
    Closed, insertion-ordered set of categories.

    Ids are opaque. Order matters: it is the tie-break order used when two
    categories score the same. Duplicate ids keep their first occurrence.
    """

    def __init__(self, categories: Iterable[Category] = ()):
        self._by_id: Dict[str, Category] = {}
        for cat in categories:
            if cat.id not in self._by_id:
                self._by_id[cat.id] = cat

    @classmethod
    def from_labels(cls, labels: Iterable[str]) -> "CategoryCatalog":
        """Catalog built from training labels, first-seen order, name = id."""
        return cls(Category(id=label, name=label) for label in labels)

    @property
    def ids(self) -> List[str]:
        return list(self._by_id)

    def get(self, category_id: str) -> Optional[Category]:
        return self._by_id.get(category_id)

    def require(self, category_id: str) -> Category:
        try:
            return self._by_id[category_id]
        except KeyError:
            raise UnknownCategoryError(category_id) from None

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def __iter__(self) -> Iterator[Category]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __repr__(self) -> str:
        return f"CategoryCatalog({self.ids!r})"
