"""
Base trainer class for linear sentiment classifiers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import numpy as np

from models.featurizer import FeaturizerState
from models.linear_model import ModelArtifact
from utils.errors import TrainingError


@dataclass(frozen=True)
class TrainingConfig:
    """Configuration for training."""
    # Optimizer
    trainer: str = "sdca"  # sdca, lbfgs
    max_iterations: int = 100
    l2_regularization: float = 1e-3
    convergence_tolerance: float = 1e-2

    # Example ordering
    shuffle: bool = True
    seed: int = 42

    # Progress bar over epochs
    show_progress: bool = False

    def __post_init__(self):
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if not self.l2_regularization > 0:
            raise ValueError(f"l2_regularization must be > 0, got {self.l2_regularization}")
        if not self.convergence_tolerance > 0:
            raise ValueError(
                f"convergence_tolerance must be > 0, got {self.convergence_tolerance}"
            )


class BaseTrainer(ABC):
    """
    Abstract base class for binary linear trainers.

    Subclasses implement ``fit_weights``; validation and packaging the
    result into a ModelArtifact live here so every solver honours the
    same contract.
    """

    name = "base"

    def __init__(self, config: TrainingConfig = TrainingConfig()):
        self.config = config
        self.training_history: Dict[str, list] = {}

    @abstractmethod
    def fit_weights(
        self,
        features: np.ndarray,
        labels: np.ndarray
    ) -> Tuple[np.ndarray, float, Dict[str, Any]]:
        """
        Fit the linear model.

        Args:
            features: Validated (n, d) float matrix
            labels: Boolean array of length n with both classes present

        Returns:
            Tuple of (weights, bias, metadata)
        """
        pass

    def train(
        self,
        feature_vectors: Sequence,
        labels: Sequence[bool],
        featurizer_state: FeaturizerState
    ) -> ModelArtifact:
        """
        Train on feature vectors and bundle the result with the featurizer.

        Args:
            feature_vectors: Sequence of vectors or an (n, d) matrix
            labels: Binary labels, True for positive
            featurizer_state: State that produced the vectors

        Returns:
            Trained ModelArtifact

        Raises:
            TrainingError: If the data cannot be trained on
        """
        features, y = self.validate(feature_vectors, labels, featurizer_state.dimension)
        weights, bias, metadata = self.fit_weights(features, y)

        return ModelArtifact(
            featurizer_state=featurizer_state,
            weights=weights,
            bias=bias,
            trainer=self.name,
            metadata=metadata
        )

    @staticmethod
    def validate(
        feature_vectors: Sequence,
        labels: Sequence[bool],
        expected_dimension: int
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Check shapes and classes, returning ``(features, labels)`` arrays."""
        rows = list(feature_vectors) if not isinstance(feature_vectors, np.ndarray) else feature_vectors
        if len(rows) == 0:
            raise TrainingError("No training examples were provided")

        labels = list(labels)
        if len(labels) != len(rows):
            raise TrainingError(
                f"Got {len(rows)} feature vectors but {len(labels)} labels"
            )

        if isinstance(rows, np.ndarray):
            features = np.asarray(rows, dtype=np.float64)
            if features.ndim != 2:
                raise TrainingError(f"Expected a 2-D feature matrix, got shape {features.shape}")
            bad_rows = [] if features.shape[1] == expected_dimension else [0]
        else:
            rows = [np.asarray(row, dtype=np.float64).ravel() for row in rows]
            bad_rows = [i for i, row in enumerate(rows) if row.shape[0] != expected_dimension]
            features = np.vstack(rows) if not bad_rows else None

        if bad_rows:
            raise TrainingError(
                f"Feature vector {bad_rows[0]} does not have the expected dimension "
                f"{expected_dimension}",
                hint="Vectors must come from the same fitted featurizer."
            )

        if not np.all(np.isfinite(features)):
            raise TrainingError("Feature vectors contain NaN or infinite values")

        y = np.asarray([bool(label) for label in labels], dtype=bool)
        if len(np.unique(y)) < 2:
            raise TrainingError(
                "Training data contains a single label class",
                hint="Both positive and negative examples are required."
            )

        return features, y
