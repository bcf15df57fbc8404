# tests/test_feedback.py
"""
Tests for the feedback queue and retraining.
"""
import threading

import pytest

import categorizer.model as model_module
from categorizer.model import TransactionCategorizer
from stc_core.errors import UnknownCategoryError
from stc_core.models import Category, Feedback


def test_feedback_is_queued_without_changing_predictions(trained_model):
    before = trained_model.predict("Netflix subscription")
    trained_model.add_feedback("Netflix subscription", "cat-3")
    assert trained_model.pending_feedback == [
        Feedback("Netflix subscription", "cat-3", None)
    ]
    assert trained_model.predict("Netflix subscription") == before


def test_retrain_learns_the_correction(
    trained_model, sample_transactions, sample_categories
):
    trained_model.add_feedback("Netflix subscription", "cat-3", "2025-04-30")
    trained_model.retrain_with_feedback(sample_transactions, sample_categories)

    pred = trained_model.predict("Netflix subscription")
    assert pred.category_id == "cat-3"
    assert pred.confidence == 1.0
    assert trained_model.state.training_size == len(sample_transactions) + 1


def test_retrain_drains_queue_and_second_call_is_noop(
    trained_model, sample_transactions, sample_categories
):
    trained_model.add_feedback("Netflix subscription", "cat-3")
    trained_model.retrain_with_feedback(sample_transactions, sample_categories)
    assert trained_model.pending_feedback == []

    state = trained_model.state
    trained_model.retrain_with_feedback(sample_transactions, sample_categories)
    assert trained_model.state is state


def test_retrain_does_not_touch_caller_transactions(
    trained_model, sample_transactions, sample_categories
):
    txns = list(sample_transactions)
    trained_model.add_feedback("Swiggy order", "cat-1")
    trained_model.retrain_with_feedback(txns, sample_categories)
    assert txns == sample_transactions


def test_feedback_for_unknown_category_is_rejected_once_trained(trained_model):
    with pytest.raises(UnknownCategoryError):
        trained_model.add_feedback("Mystery", "cat-404")
    assert trained_model.pending_feedback == []


def test_feedback_before_training_trains_on_feedback_alone():
    model = TransactionCategorizer()
    model.add_feedback("Uber ride home", "transport")
    model.retrain_with_feedback([], [Category("transport", "Transport")])
    assert model.is_trained
    assert model.predict("Uber ride home").category_id == "transport"
    assert model.pending_feedback == []


def test_queue_is_kept_when_retrain_cannot_run():
    model = TransactionCategorizer()
    model.add_feedback("Mystery", "cat-9")
    # no transaction (feedback included) belongs to the catalog
    model.retrain_with_feedback([], [Category("cat-1", "Food")])
    assert not model.is_trained
    assert len(model.pending_feedback) == 1


def test_overlapping_retrains_do_not_share_or_lose_feedback(
    monkeypatch, trained_model, sample_transactions, sample_categories
):
    real_build = model_module.build_state
    entered = threading.Event()
    release = threading.Event()
    feedback_sizes = []

    def slow_build(transactions, catalog):
        feedback_sizes.append(sum(1 for t in transactions if t.user_id == "feedback"))
        entered.set()
        release.wait(5)
        return real_build(transactions, catalog)

    monkeypatch.setattr(model_module, "build_state", slow_build)

    trained_model.add_feedback("Netflix subscription", "cat-3")
    trained_model.add_feedback("Spotify premium", "cat-3")
    workers = [
        threading.Thread(
            target=trained_model.retrain_with_feedback,
            args=(sample_transactions, sample_categories),
        )
        for _ in range(2)
    ]
    workers[0].start()
    assert entered.wait(5)
    workers[1].start()
    trained_model.add_feedback("Gym membership", "cat-7")
    release.set()
    for w in workers:
        w.join(5)

    assert feedback_sizes == [2, 1]
    assert trained_model.pending_feedback == []
    assert trained_model.state.training_size == len(sample_transactions) + 1
