import json

import pytest

from categorizer.model import TransactionCategorizer
from categorizer.persistence import load_model, save_model
from stc_core.errors import NotTrainedError


def test_saved_model_predicts_the_same(trained_model, tmp_path):
    path = save_model(trained_model, tmp_path / "models" / "m.json")
    loaded = load_model(path)

    assert loaded.categories.ids == trained_model.categories.ids
    assert loaded.state.vectorizer.vocabulary == trained_model.state.vectorizer.vocabulary
    for desc, date in [
        ("Coffee at Starbucks", None),
        ("Electricity bill", "2025-03-01"),
        ("zzzz", "2025-04-20"),
    ]:
        assert loaded.predict(desc, date) == trained_model.predict(desc, date)


def test_saved_file_is_plain_json(trained_model, tmp_path):
    path = save_model(trained_model, tmp_path / "m.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["format_version"] == 1
    assert data["training_size"] == 24
    assert data["categories"][0] == {"id": "cat-1", "name": "Food & Dining", "color": "#FF6384"}
    assert data["merchants"]["electricity bill mseb"] == {"cat-5": 2}
    assert len(data["seasonal"]["cat-1"]) == 12


def test_untrained_model_cannot_be_saved(tmp_path):
    with pytest.raises(NotTrainedError):
        save_model(TransactionCategorizer(), tmp_path / "m.json")


def test_missing_or_foreign_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_model(tmp_path / "nope.json")

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"format_version": 99}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_model(bad)
