# tests/conftest.py
import itertools
import logging
from pathlib import Path
from typing import List

import pytest
import yaml

from categorizer.model import TransactionCategorizer
from stc_core.models import Category, Transaction

ROOT = Path(__file__).resolve().parents[1]
SAMPLE_CSV = ROOT / "data" / "samples" / "transactions.csv"

# (date, description, category_id) from the bundled sample history
SAMPLE_ROWS = [
    ("2025-04-25", "Grocery shopping at DMart", "cat-1"),
    ("2025-04-24", "Ola ride to office", "cat-2"),
    ("2025-04-23", "Movie tickets at PVR", "cat-3"),
    ("2025-04-22", "Monthly rent payment", "cat-4"),
    ("2025-04-21", "Electricity bill MSEB", "cat-5"),
    ("2025-04-20", "New clothes from Myntra", "cat-6"),
    ("2025-04-19", "Doctor visit at Apollo", "cat-7"),
    ("2025-04-18", "Coffee at Starbucks", "cat-1"),
    ("2025-04-17", "Daily vegetables from local market", "cat-1"),
    ("2025-04-16", "Milk and dairy products", "cat-1"),
    ("2025-04-15", "LPG Gas cylinder refill", "cat-5"),
    ("2025-04-14", "Internet bill Jio Fiber", "cat-5"),
    ("2025-04-13", "House cleaning service", "cat-4"),
    ("2025-04-12", "Monthly maintenance society", "cat-4"),
    ("2025-04-11", "Water purifier service", "cat-5"),
    ("2025-04-10", "School fees payment", "cat-7"),
    ("2025-04-09", "Dinner at Mainland China", "cat-1"),
    ("2025-04-08", "Mobile recharge Airtel", "cat-5"),
    ("2025-03-15", "Monthly grocery Big Basket", "cat-1"),
    ("2025-03-10", "Gas bill Mahanagar Gas", "cat-5"),
    ("2025-03-05", "Electricity bill MSEB", "cat-5"),
    ("2025-02-28", "Monthly rent payment", "cat-4"),
    ("2025-02-20", "Gym membership renewal", "cat-7"),
    ("2025-02-15", "Restaurant dinner Taj", "cat-1"),
]

SAMPLE_CATEGORIES = [
    Category("cat-1", "Food & Dining", "#FF6384"),
    Category("cat-2", "Transportation", "#36A2EB"),
    Category("cat-3", "Entertainment", "#FFCE56"),
    Category("cat-4", "Housing", "#4BC0C0"),
    Category("cat-5", "Utilities", "#9966FF"),
    Category("cat-6", "Shopping", "#FF9F40"),
    Category("cat-7", "Healthcare", "#8AC926"),
    Category("cat-8", "Other", "#1982C4"),
]


_IDS = itertools.count(1)


def make_txn(
    description: str,
    category_id: str,
    date="2025-04-01",
    txn_id: str = None,
    amount: float = 10.0,
) -> Transaction:
    """Helper to create test transactions."""
    return Transaction(
        id=txn_id or f"t-{next(_IDS)}",
        date=date,
        description=description,
        amount=amount,
        category_id=category_id,
        user_id="1",
    )


@pytest.fixture
def sample_transactions() -> List[Transaction]:
    return [
        make_txn(desc, cat, date, txn_id=f"tr-{i}")
        for i, (date, desc, cat) in enumerate(SAMPLE_ROWS, start=1)
    ]


@pytest.fixture
def sample_categories() -> List[Category]:
    return list(SAMPLE_CATEGORIES)


@pytest.fixture
def trained_model(sample_transactions, sample_categories) -> TransactionCategorizer:
    model = TransactionCategorizer()
    model.train(sample_transactions, sample_categories)
    return model


@pytest.fixture
def settings_yaml(tmp_path):
    """Write a settings YAML and return its path; call with a dict."""

    def _write(cfg: dict) -> Path:
        p = tmp_path / "categorizer.yaml"
        with open(p, "w", encoding="utf-8") as f:
            yaml.safe_dump(cfg, f)
        return p

    return _write


@pytest.fixture(autouse=True)
def _reset_root_logging():
    """CLI runs call setup_logging(); drop their handlers once the test is done."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        if not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
