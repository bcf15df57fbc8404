import pytest

from stc_core.errors import UnknownCategoryError
from stc_core.models import Category, CategoryCatalog, Prediction


@pytest.mark.parametrize(
    "confidence,level",
    [(0.95, "high"), (0.81, "high"), (0.8, "medium"), (0.6, "medium"), (0.5, "low"), (0.0, "low")],
)
def test_confidence_level_buckets(confidence, level):
    assert Prediction("cat-1", confidence).confidence_level == level


def test_catalog_keeps_order_and_first_duplicate():
    catalog = CategoryCatalog(
        [
            Category("cat-2", "Transport"),
            Category("cat-1", "Food"),
            Category("cat-2", "Duplicate"),
        ]
    )
    assert catalog.ids == ["cat-2", "cat-1"]
    assert len(catalog) == 2
    assert catalog.get("cat-2").name == "Transport"
    assert [c.name for c in catalog] == ["Transport", "Food"]


def test_catalog_membership_and_require():
    catalog = CategoryCatalog([Category("cat-1", "Food")])
    assert "cat-1" in catalog
    assert "cat-9" not in catalog
    assert catalog.get("cat-9") is None
    assert catalog.require("cat-1").name == "Food"
    with pytest.raises(UnknownCategoryError) as exc:
        catalog.require("cat-9")
    assert exc.value.category_id == "cat-9"


def test_catalog_from_labels():
    catalog = CategoryCatalog.from_labels(["food", "transport", "food"])
    assert catalog.ids == ["food", "transport"]
    assert catalog.get("food").name == "food"
