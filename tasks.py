# tasks.py
"""
Developer task runner using Invoke.
Run `inv --list` to see tasks.

Key tasks:
  inv train [--data <csv>] [--model <json>]
  inv predict --description "Coffee at Starbucks" [--date 2025-04-18]
  inv evaluate [--data <csv>] [--model <json>]
  inv split-eval [--data <csv>] [--seed 7]
  inv test
  inv clean
"""

from invoke import task
from pathlib import Path
import sys


REPO = Path(__file__).parent
DATA = REPO / "data" / "samples" / "transactions.csv"
MODELDIR = REPO / "data" / "models"
MODEL = MODELDIR / "categorizer.json"


def _python():
    """Return the python executable inside the current venv."""
    return sys.executable or "python"


def _catproc(c, *args):
    c.run(f'"{_python()}" catproc.py ' + " ".join(args), pty=False)


@task(
    help={
        "data": "Labelled transactions CSV (default: data/samples/transactions.csv)",
        "model": "Where to write the model JSON (default: data/models/categorizer.json)",
        "settings": "Categorizer settings YAML (default: from config.toml)",
    }
)
def train(c, data=str(DATA), model=str(MODEL), settings=None):
    """Train on a labelled CSV and save the model."""
    args = ["train", f'"{data}"', "--model", f'"{model}"']
    if settings:
        args += ["--settings", f'"{settings}"']
    _catproc(c, *args)


@task(
    help={
        "description": "Transaction description to categorize",
        "date": "Optional transaction date",
        "model": "Model JSON (default: data/models/categorizer.json)",
        "settings": "Categorizer settings YAML (default: from config.toml)",
    }
)
def predict(c, description, date=None, model=str(MODEL), settings=None):
    """Suggest a category for one description."""
    args = ["predict", f'"{description}"', "--model", f'"{model}"']
    if date:
        args += ["--date", date]
    if settings:
        args += ["--settings", f'"{settings}"']
    _catproc(c, *args)


@task(
    help={
        "data": "Labelled transactions CSV to score against",
        "model": "Model JSON (default: data/models/categorizer.json)",
    }
)
def evaluate(c, data=str(DATA), model=str(MODEL)):
    """Score a saved model."""
    _catproc(c, "evaluate", f'"{data}"', "--model", f'"{model}"')


@task(
    name="split-eval",
    help={
        "data": "Labelled transactions CSV",
        "test_fraction": "Held-out share (default: 0.2)",
        "seed": "Shuffle seed",
    },
)
def split_eval(c, data=str(DATA), test_fraction=0.2, seed=None):
    """Shuffle, split, train and score in one go."""
    args = ["split-eval", f'"{data}"', "--test-fraction", str(test_fraction)]
    if seed is not None:
        args += ["--seed", str(seed)]
    _catproc(c, *args)


@task
def test(c):
    """Run unit tests with pytest."""
    c.run(f'"{_python()}" -m pytest -q', pty=False)


@task
def clean(c):
    """Delete saved models."""
    if MODELDIR.exists():
        for p in MODELDIR.glob("*.json"):
            p.unlink()
            print(f"Removed {p}")
    # Recreate empty dir to keep structure predictable
    MODELDIR.mkdir(parents=True, exist_ok=True)
