"""Pytest configuration and fixtures."""
import matplotlib
matplotlib.use('Agg')

import pytest

from training.trainer_base import TrainingConfig
from training.train import train_model
from training.utils.data_loader import LabeledRecord


POSITIVE_TEXTS = [
    "good food",
    "great service and friendly staff",
    "I love this place",
    "the pizza was amazing",
    "excellent pasta, will come back",
    "wonderful atmosphere and good wine",
    "best burger in town",
    "really tasty and fresh",
    "amazing dessert, loved it",
    "friendly waiters and great prices",
    "the soup was delicious",
    "perfect evening, great food",
]

NEGATIVE_TEXTS = [
    "bad food",
    "terrible service and rude staff",
    "I hate this place",
    "the steak was awful",
    "horrible meal, never again",
    "cold fries and bad coffee",
    "worst burger in town",
    "bland and stale",
    "disgusting dessert, hated it",
    "slow waiters and high prices",
    "the soup was inedible",
    "awful evening, terrible food",
]


@pytest.fixture
def records():
    """Small balanced corpus of restaurant reviews."""
    positives = [LabeledRecord(text=t, label=True) for t in POSITIVE_TEXTS]
    negatives = [LabeledRecord(text=t, label=False) for t in NEGATIVE_TEXTS]
    # interleave so any prefix holds both classes
    return [r for pair in zip(positives, negatives) for r in pair]


@pytest.fixture
def training_config():
    return TrainingConfig(max_iterations=200, l2_regularization=1e-2, seed=7)


@pytest.fixture
def trained_model(records, training_config):
    """SDCA model trained on the whole corpus."""
    model, _ = train_model(records, config=training_config, verbose=False)
    return model


@pytest.fixture
def dataset_file(tmp_path, records):
    """The corpus written as a tab-separated dataset file."""
    path = tmp_path / "reviews.txt"
    lines = [f"{r.text}\t{int(r.label)}" for r in records]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
