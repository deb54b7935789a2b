"""
Entry points for fitting a sentiment model from labeled records.
"""

import time
from typing import Dict, List, Optional, Sequence, Tuple

from models.featurizer import FeaturizerState, TextFeaturizer
from models.linear_model import ModelArtifact

from .trainer_base import BaseTrainer, TrainingConfig
from .train_lbfgs import LbfgsLogisticTrainer
from .train_sdca import SdcaLogisticTrainer


TRAINERS = {
    'sdca': SdcaLogisticTrainer,
    'lbfgs': LbfgsLogisticTrainer,
}


def get_trainer(config: TrainingConfig) -> BaseTrainer:
    """Instantiate the trainer named by ``config.trainer``."""
    key = config.trainer.lower()
    if key not in TRAINERS:
        raise ValueError(f"Unknown trainer: {config.trainer}. "
                         f"Available trainers: {list(TRAINERS.keys())}")
    return TRAINERS[key](config)


def train(
    feature_vectors: Sequence,
    labels: Sequence[bool],
    config: TrainingConfig,
    featurizer_state: FeaturizerState
) -> ModelArtifact:
    """
    Train a binary classifier on already featurized data.

    Args:
        feature_vectors: Vectors produced by ``featurizer_state``
        labels: Binary labels, True for positive
        config: Training configuration (selects the solver)
        featurizer_state: State bundled into the artifact

    Returns:
        Trained ModelArtifact
    """
    return get_trainer(config).train(feature_vectors, labels, featurizer_state)


def train_model(
    records,
    config: TrainingConfig = TrainingConfig(),
    featurizer: Optional[TextFeaturizer] = None,
    verbose: bool = True
) -> Tuple[ModelArtifact, Dict[str, List[float]]]:
    """
    Fit the featurizer on the training records and train the classifier.

    Args:
        records: Training LabeledRecords
        config: Training configuration
        featurizer: Featurizer to fit (defaults to TextFeaturizer())
        verbose: Whether to print a training summary

    Returns:
        Tuple of (model, training history)
    """
    records = list(records)
    featurizer = featurizer or TextFeaturizer()
    trainer = get_trainer(config)

    start_time = time.time()

    state, features = featurizer.fit_transform([r.text for r in records])
    model = trainer.train(features, [r.label for r in records], state)

    if verbose:
        metadata = model.metadata
        print(f"Trainer: {trainer.name}, examples: {len(records)}, "
              f"features: {state.dimension}")
        print(f"Epochs: {metadata.get('epochs')}, converged: {metadata.get('converged')}"
              + (f", duality gap: {metadata['duality_gap']:.2e}"
                 if 'duality_gap' in metadata else ""))
        print(f"Training completed in {time.time() - start_time:.2f} seconds")

    return model, trainer.training_history
