"""
Trained linear sentiment model.

A ModelArtifact bundles the fitted featurizer state with the classifier
weights and bias, since the weights mean nothing without the exact
feature mapping that produced them.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

import numpy as np

from .featurizer import FeaturizerState, TextFeaturizer


def sigmoid(score):
    """Numerically stable logistic function for scalars or arrays."""
    score = np.asarray(score, dtype=np.float64)
    out = np.empty_like(score)
    positive = score >= 0
    out[positive] = 1.0 / (1.0 + np.exp(-score[positive]))
    exp_score = np.exp(score[~positive])
    out[~positive] = exp_score / (1.0 + exp_score)
    if out.ndim == 0:
        return float(out)
    return out


@dataclass(frozen=True)
class ModelArtifact:
    """Featurizer state, weights and bias of a trained binary classifier."""
    featurizer_state: FeaturizerState
    weights: np.ndarray
    bias: float
    trainer: str = "sdca"
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        weights = np.array(self.weights, dtype=np.float64)
        if weights.ndim != 1:
            raise ValueError(f"weights must be 1-D, got shape {weights.shape}")
        if weights.shape[0] != self.featurizer_state.dimension:
            raise ValueError(
                f"weights dimension {weights.shape[0]} does not match "
                f"featurizer dimension {self.featurizer_state.dimension}"
            )
        weights.setflags(write=False)
        object.__setattr__(self, 'weights', weights)
        object.__setattr__(self, 'bias', float(self.bias))
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

    @property
    def dimension(self) -> int:
        return self.weights.shape[0]

    def featurize(self, text: str) -> np.ndarray:
        return TextFeaturizer.transform(text, self.featurizer_state)

    def decision_function(self, features: np.ndarray) -> np.ndarray:
        """Raw linear scores for an (n, dimension) feature matrix."""
        return features @ self.weights + self.bias

    def score(self, text: str) -> float:
        """Raw linear score of a single text."""
        return float(self.featurize(text) @ self.weights + self.bias)

    def predict_proba(self, text: str) -> float:
        """Probability that the text is positive."""
        return sigmoid(self.score(text))
