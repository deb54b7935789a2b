"""
Test suite for model evaluation.
"""
import numpy as np
import pytest

from evaluation.eval import (
    Metrics,
    ModelEvaluator,
    compute_classification_metrics,
    evaluate,
    format_metrics,
    plot_confusion_matrix,
    plot_roc_curve
)
from training.utils.data_loader import LabeledRecord


class TestComputeMetrics:
    """Metric arithmetic on known inputs."""

    def test_known_values(self):
        labels = np.array([True, True, False, False])
        probabilities = np.array([0.9, 0.4, 0.6, 0.1])
        metrics = compute_classification_metrics(labels, probabilities >= 0.5, probabilities)

        assert metrics.accuracy == pytest.approx(0.5)
        assert metrics.auc == pytest.approx(0.75)
        assert metrics.f1 == pytest.approx(0.5)
        assert metrics.precision == pytest.approx(0.5)
        assert metrics.recall == pytest.approx(0.5)
        assert metrics.confusion_matrix == [[1, 1], [1, 1]]
        assert metrics.support == 4
        assert metrics.auc_defined

    def test_tied_scores_average(self):
        labels = np.array([True, False, True, False])
        probabilities = np.full(4, 0.5)
        metrics = compute_classification_metrics(labels, probabilities >= 0.5, probabilities)
        assert metrics.auc == pytest.approx(0.5)

    def test_single_class_auc_is_undefined(self):
        labels = np.array([True, True, True])
        probabilities = np.array([0.8, 0.3, 0.6])
        metrics = compute_classification_metrics(labels, probabilities >= 0.5, probabilities)
        assert metrics.auc == 0.0
        assert not metrics.auc_defined
        assert metrics.accuracy == pytest.approx(2 / 3)

    def test_no_positive_predictions(self):
        labels = np.array([True, False])
        probabilities = np.array([0.2, 0.1])
        metrics = compute_classification_metrics(labels, probabilities >= 0.5, probabilities)
        assert metrics.f1 == 0.0
        assert metrics.precision == 0.0


class TestModelEvaluator:
    """Evaluating a trained model on records."""

    def test_metrics_within_bounds(self, trained_model, records):
        metrics = ModelEvaluator(trained_model).evaluate(records)
        for value in (metrics.accuracy, metrics.auc, metrics.f1):
            assert 0.0 <= value <= 1.0
        assert metrics.support == len(records)

    def test_training_corpus_is_ranked_well(self, trained_model, records):
        metrics = evaluate(trained_model, records)
        assert metrics.auc >= 0.9

    def test_empty_test_set(self, trained_model):
        metrics = evaluate(trained_model, [])
        assert metrics.accuracy == 0.0
        assert metrics.auc == 0.0
        assert metrics.f1 == 0.0
        assert metrics.support == 0

    def test_single_class_test_set(self, trained_model):
        records = [LabeledRecord("good food", True), LabeledRecord("great pasta", True)]
        metrics = evaluate(trained_model, records)
        assert not metrics.auc_defined
        assert metrics.auc == 0.0

    def test_single_record(self, trained_model):
        metrics = evaluate(trained_model, [LabeledRecord("bad food", False)])
        assert metrics.support == 1

    def test_probabilities_match_model(self, trained_model):
        texts = ["good food", "bad food"]
        probabilities = ModelEvaluator(trained_model).predict_proba(texts)
        for text, p in zip(texts, probabilities):
            assert p == pytest.approx(trained_model.predict_proba(text))


class TestReporting:
    """Console block and figures."""

    def test_format_metrics(self):
        text = format_metrics(Metrics(accuracy=0.5, auc=0.75, f1=0.5))
        assert "Accuracy: 50.00%" in text
        assert "Auc: 75.00%" in text
        assert "F1Score: 50.00%" in text

    def test_format_undefined_auc(self):
        text = format_metrics(Metrics(accuracy=1.0, auc=0.0, f1=1.0, auc_defined=False))
        assert "undefined" in text

    def test_metrics_to_dict(self):
        data = Metrics(accuracy=0.5, auc=0.75, f1=0.5).to_dict()
        assert data['accuracy'] == 0.5
        assert data['confusion_matrix'] == [[0, 0], [0, 0]]

    def test_plots_are_written(self, trained_model, records, tmp_path):
        metrics = evaluate(trained_model, records)
        plot_confusion_matrix(metrics.confusion_matrix, save_path=str(tmp_path / "cm.png"))
        plot_roc_curve(trained_model, records, save_path=str(tmp_path / "roc.png"))
        assert (tmp_path / "cm.png").exists()
        assert (tmp_path / "roc.png").exists()

    def test_roc_skipped_for_single_class(self, trained_model):
        assert plot_roc_curve(trained_model, [LabeledRecord("good food", True)]) is None
