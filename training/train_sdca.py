"""
Stochastic dual coordinate ascent for L2-regularized logistic regression.

Primal:  P(w) = 1/n sum log(1 + exp(-y_i w.x_i)) + lambda/2 ||w||^2
Dual:    D(b) = 1/n sum H(b_i) - lambda/2 ||w(b)||^2,
         w(b) = 1/(lambda n) sum b_i y_i x_i,  b_i in (0, 1)

where H is the binary entropy. The bias is learned as the weight of a
constant 1.0 feature appended to every example.
"""

from typing import Any, Dict, Tuple

import numpy as np
from tqdm import tqdm

from .trainer_base import BaseTrainer, TrainingConfig


# Dual variables stay strictly inside (0, 1) so the entropy term is finite
DUAL_EPSILON = 1e-12
NEWTON_STEPS = 5
NEWTON_TOLERANCE = 1e-10


def binary_entropy(beta: np.ndarray) -> np.ndarray:
    return -(beta * np.log(beta) + (1.0 - beta) * np.log1p(-beta))


def primal_objective(margins: np.ndarray, weights: np.ndarray, l2: float) -> float:
    return float(np.mean(np.logaddexp(0.0, -margins)) + 0.5 * l2 * weights @ weights)


def dual_objective(beta: np.ndarray, weights: np.ndarray, l2: float) -> float:
    return float(np.mean(binary_entropy(beta)) - 0.5 * l2 * weights @ weights)


class SdcaLogisticTrainer(BaseTrainer):
    """
    SDCA logistic regression trainer.

    Example:
        >>> trainer = SdcaLogisticTrainer(TrainingConfig(seed=7))
        >>> model = trainer.train(vectors, labels, featurizer_state)
        >>> trainer.training_history['duality_gap'][-1]
    """

    name = "sdca"

    def __init__(self, config: TrainingConfig = TrainingConfig()):
        super().__init__(config)

    def fit_weights(
        self,
        features: np.ndarray,
        labels: np.ndarray
    ) -> Tuple[np.ndarray, float, Dict[str, Any]]:
        config = self.config
        n = features.shape[0]
        l2 = config.l2_regularization
        scale = 1.0 / (l2 * n)

        x = np.hstack([features, np.ones((n, 1))])
        y = np.where(labels, 1.0, -1.0)
        sq_norms = np.einsum('ij,ij->i', x, x) * scale

        beta = np.full(n, 0.5)
        w = scale * (x.T @ (beta * y))

        rng = np.random.default_rng(config.seed)
        self.training_history = {
            'primal': [],
            'dual': [],
            'duality_gap': []
        }

        converged = False
        gap = float('inf')
        epochs = range(config.max_iterations)
        if config.show_progress:
            epochs = tqdm(epochs, desc="SDCA", leave=False)

        epoch = 0
        for epoch in epochs:
            order = rng.permutation(n) if config.shuffle else np.arange(n)

            for i in order:
                x_i = x[i]
                delta = self._coordinate_step(beta[i], y[i] * (x_i @ w), sq_norms[i])
                if delta != 0.0:
                    beta[i] += delta
                    w += (delta * y[i] * scale) * x_i

            margins = y * (x @ w)
            primal = primal_objective(margins, w, l2)
            dual = dual_objective(beta, w, l2)
            gap = (primal - dual) / max(abs(primal), np.finfo(float).tiny)

            self.training_history['primal'].append(primal)
            self.training_history['dual'].append(dual)
            self.training_history['duality_gap'].append(gap)

            if config.show_progress:
                epochs.set_postfix({'gap': f'{gap:.2e}'})

            if gap <= config.convergence_tolerance:
                converged = True
                break

        metadata = {
            'epochs': epoch + 1,
            'converged': converged,
            'duality_gap': float(gap),
            'num_examples': n,
            'l2_regularization': l2,
            'seed': config.seed
        }
        return w[:-1].copy(), float(w[-1]), metadata

    @staticmethod
    def _coordinate_step(beta: float, margin: float, q: float) -> float:
        """
        Maximize the dual along one coordinate with a few Newton steps.

        Args:
            beta: Current dual variable
            margin: y_i * w.x_i at the current weights
            q: ||x_i||^2 / (lambda n)

        Returns:
            Change to apply to beta
        """
        new = beta
        for _ in range(NEWTON_STEPS):
            delta = new - beta
            grad = np.log((1.0 - new) / new) - margin - delta * q
            hess = -1.0 / (new * (1.0 - new)) - q
            step = -grad / hess
            new = min(max(new + step, DUAL_EPSILON), 1.0 - DUAL_EPSILON)
            if abs(step) < NEWTON_TOLERANCE:
                break
        return new - beta
