"""
Evaluation module for binary sentiment model quality.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    f1_score,
    log_loss,
    precision_score,
    recall_score,
    roc_auc_score,
    roc_curve
)

from models.featurizer import TextFeaturizer
from models.linear_model import ModelArtifact, sigmoid


@dataclass(frozen=True)
class Metrics:
    """Aggregate quality metrics for one evaluation run."""
    accuracy: float
    auc: float
    f1: float
    precision: float = 0.0
    recall: float = 0.0
    log_loss: float = 0.0
    confusion_matrix: List[List[int]] = field(default_factory=lambda: [[0, 0], [0, 0]])
    support: int = 0
    # False when the test set holds a single class and AUC is undefined
    auc_defined: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ModelEvaluator:
    """Scores held-out records with a trained model and computes metrics."""

    def __init__(self, model: ModelArtifact, threshold: float = 0.5):
        self.model = model
        self.threshold = threshold

    def predict_proba(self, texts: List[str]) -> np.ndarray:
        features = TextFeaturizer.transform_batch(texts, self.model.featurizer_state)
        return sigmoid(self.model.decision_function(features))

    def evaluate(self, test_records: Iterable) -> Metrics:
        """
        Evaluate the model on labeled records.

        Args:
            test_records: LabeledRecords not seen during training

        Returns:
            Metrics
        """
        test_records = list(test_records)
        if not test_records:
            return Metrics(accuracy=0.0, auc=0.0, f1=0.0, auc_defined=False)

        labels = np.array([bool(r.label) for r in test_records])
        probabilities = np.atleast_1d(self.predict_proba([r.text for r in test_records]))
        predictions = probabilities >= self.threshold

        return compute_classification_metrics(labels, predictions, probabilities)


def compute_classification_metrics(
    labels: np.ndarray,
    predictions: np.ndarray,
    probabilities: np.ndarray
) -> Metrics:
    """
    Compute binary classification metrics.

    AUC is the rank-based ROC area with tied scores averaged. When only
    one class is present it is undefined and reported as 0.0 with
    ``auc_defined`` set to False.

    Args:
        labels: True labels (bool)
        predictions: Predicted labels (bool)
        probabilities: Predicted probability of the positive class

    Returns:
        Metrics
    """
    labels = np.asarray(labels, dtype=bool).astype(int)
    predictions = np.asarray(predictions, dtype=bool).astype(int)
    probabilities = np.asarray(probabilities, dtype=np.float64)

    auc_defined = len(np.unique(labels)) == 2
    auc = float(roc_auc_score(labels, probabilities)) if auc_defined else 0.0

    return Metrics(
        accuracy=float(accuracy_score(labels, predictions)),
        auc=auc,
        f1=float(f1_score(labels, predictions, zero_division=0)),
        precision=float(precision_score(labels, predictions, zero_division=0)),
        recall=float(recall_score(labels, predictions, zero_division=0)),
        log_loss=float(log_loss(labels, probabilities, labels=[0, 1])),
        confusion_matrix=confusion_matrix(labels, predictions, labels=[0, 1]).tolist(),
        support=int(labels.shape[0]),
        auc_defined=auc_defined
    )


def evaluate(model: ModelArtifact, test_records: Iterable) -> Metrics:
    """Evaluate ``model`` on ``test_records`` at the 0.5 threshold."""
    return ModelEvaluator(model).evaluate(test_records)


def format_metrics(metrics: Metrics) -> str:
    """Render metrics as the console block printed after evaluation."""
    auc = f"{metrics.auc:.2%}" if metrics.auc_defined else "undefined (single class)"
    lines = [
        "Model quality metrics evaluation",
        "--------------------------------",
        f"Accuracy: {metrics.accuracy:.2%}",
        f"Auc: {auc}",
        f"F1Score: {metrics.f1:.2%}",
    ]
    return "\n".join(lines)


def plot_confusion_matrix(
    confusion: List[List[int]],
    class_names: Optional[List[str]] = None,
    save_path: Optional[str] = None,
    show: bool = False
):
    """
    Plot confusion matrix.

    Args:
        confusion: 2x2 confusion matrix (rows are true labels)
        class_names: Optional class names
        save_path: Optional path to save plot
        show: Whether to call ``plt.show()``
    """
    if class_names is None:
        class_names = ['Negative', 'Positive']

    fig = plt.figure(figsize=(8, 6))
    sns.heatmap(
        np.asarray(confusion),
        annot=True,
        fmt='d',
        cmap='Blues',
        xticklabels=class_names,
        yticklabels=class_names
    )

    plt.title('Confusion Matrix')
    plt.ylabel('True Label')
    plt.xlabel('Predicted Label')

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Confusion matrix saved to {save_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)
    return fig


def plot_roc_curve(
    model: ModelArtifact,
    test_records: Iterable,
    save_path: Optional[str] = None,
    show: bool = False
):
    """Plot the ROC curve of ``model`` on ``test_records``."""
    test_records = list(test_records)
    labels = np.array([bool(r.label) for r in test_records])
    if len(np.unique(labels)) < 2:
        print("ROC curve skipped: test set holds a single class")
        return None

    probabilities = ModelEvaluator(model).predict_proba([r.text for r in test_records])
    fpr, tpr, _ = roc_curve(labels, probabilities)
    auc = roc_auc_score(labels, probabilities)

    fig = plt.figure(figsize=(8, 6))
    plt.plot(fpr, tpr, 'b-', linewidth=2, label=f'ROC (AUC = {auc:.3f})')
    plt.plot([0, 1], [0, 1], 'k--', alpha=0.5)
    plt.title('ROC Curve')
    plt.xlabel('False Positive Rate')
    plt.ylabel('True Positive Rate')
    plt.legend(loc='lower right')
    plt.grid(True, alpha=0.3)

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"ROC curve saved to {save_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)
    return fig
