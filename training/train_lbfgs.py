"""
L-BFGS logistic regression trainer built on scikit-learn.

Solves the same L2-regularized objective as the SDCA trainer, except
that the intercept is not penalized, and returns an identical
ModelArtifact so evaluation and prediction do not care which solver ran.
"""

import warnings
from typing import Any, Dict, Tuple

import numpy as np
from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import LogisticRegression

from .trainer_base import BaseTrainer, TrainingConfig


class LbfgsLogisticTrainer(BaseTrainer):
    """Trainer delegating to ``sklearn.linear_model.LogisticRegression``."""

    name = "lbfgs"

    def __init__(self, config: TrainingConfig = TrainingConfig()):
        super().__init__(config)

    def fit_weights(
        self,
        features: np.ndarray,
        labels: np.ndarray
    ) -> Tuple[np.ndarray, float, Dict[str, Any]]:
        n = features.shape[0]
        # sklearn minimizes C * sum(loss) + ||w||^2 / 2
        C = 1.0 / (self.config.l2_regularization * n)

        classifier = LogisticRegression(
            C=C,
            solver='lbfgs',
            max_iter=self.config.max_iterations,
            random_state=self.config.seed
        )

        with warnings.catch_warnings():
            warnings.simplefilter('ignore', ConvergenceWarning)
            classifier.fit(features, labels.astype(int))

        iterations = int(np.max(classifier.n_iter_))
        self.training_history = {'iterations': [iterations]}

        metadata = {
            'epochs': iterations,
            'converged': iterations < self.config.max_iterations,
            'num_examples': n,
            'l2_regularization': self.config.l2_regularization,
            'seed': self.config.seed
        }
        return classifier.coef_[0].copy(), float(classifier.intercept_[0]), metadata
