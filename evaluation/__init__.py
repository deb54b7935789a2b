"""
Evaluation module for model performance metrics.
"""

from .eval import (
    Metrics,
    ModelEvaluator,
    compute_classification_metrics,
    evaluate,
    format_metrics,
    plot_confusion_matrix,
    plot_roc_curve
)

__all__ = [
    'Metrics',
    'ModelEvaluator',
    'compute_classification_metrics',
    'evaluate',
    'format_metrics',
    'plot_confusion_matrix',
    'plot_roc_curve'
]
