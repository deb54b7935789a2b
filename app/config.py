"""
Configuration for the sentiment pipeline.

Module-level constants hold the defaults; a run is described by a
``PipelineConfig`` value that is handed to each stage explicitly.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from training.trainer_base import TrainingConfig

from .examples import SAMPLE_BATCH_TEXTS, SAMPLE_SINGLE_TEXT

# Project root directory
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Dataset: one "text<TAB>label" record per line, no header
DEFAULT_DATA_PATH = os.path.join(PROJECT_ROOT, 'data', 'yelp_labelled.txt')

# Persisted model artifact
DEFAULT_MODEL_PATH = os.path.join(PROJECT_ROOT, 'checkpoints', 'sentiment_model.npz')

# Share of the dataset held out for evaluation
DEFAULT_TEST_FRACTION = 0.7
DEFAULT_SPLIT_SEED = 42

# Featurizer settings (keyword arguments of TextFeaturizer)
FEATURIZER_DEFAULTS = {
    'word_ngram': 2,
    'char_ngram': 3,
    'min_df': 1,
    'max_features': None,
    'normalize': True,
}

# Inference settings
INFERENCE_CONFIG = {
    'threshold': 0.5,
    'num_workers': None,
}

# Output formatting
OUTPUT_FORMAT = {
    'separator_width': 15,
}


@dataclass(frozen=True)
class PipelineConfig:
    """Everything one pipeline run needs."""
    data_path: str = DEFAULT_DATA_PATH
    model_path: str = DEFAULT_MODEL_PATH

    # Reuse a persisted model instead of training
    use_trained_model: bool = False

    test_fraction: float = DEFAULT_TEST_FRACTION
    split_seed: int = DEFAULT_SPLIT_SEED

    featurizer: Dict[str, Any] = field(default_factory=lambda: dict(FEATURIZER_DEFAULTS))
    training: TrainingConfig = field(default_factory=TrainingConfig)

    single_text: str = SAMPLE_SINGLE_TEXT
    batch_texts: Tuple[str, ...] = SAMPLE_BATCH_TEXTS
    num_workers: Optional[int] = INFERENCE_CONFIG['num_workers']

    # Optional outputs
    metrics_path: Optional[str] = None
    plot_dir: Optional[str] = None

    verbose: bool = True

    def __post_init__(self):
        if not 0.0 <= self.test_fraction <= 1.0:
            raise ValueError(f"test_fraction must be in [0, 1], got {self.test_fraction}")
        unknown = set(self.featurizer) - set(FEATURIZER_DEFAULTS)
        if unknown:
            raise ValueError(f"Unknown featurizer settings: {sorted(unknown)}")


def check_model_available(config: PipelineConfig) -> bool:
    """Check whether the configured model artifact exists."""
    return os.path.exists(config.model_path)


def print_config(config: PipelineConfig):
    """Print the configuration of a run."""
    print("=" * 70)
    print("SENTIMENT PIPELINE - CONFIGURATION")
    print("=" * 70)

    mode = "reuse trained model" if config.use_trained_model else "train"
    print(f"\n🔧 Mode: {mode}")

    print("\n📁 Paths:")
    if not config.use_trained_model:
        print(f"   Data:  {config.data_path}")
    exists = "✓" if check_model_available(config) else "✗"
    print(f"   {exists} Model: {config.model_path}")

    if not config.use_trained_model:
        print(f"\n✂️  Test fraction: {config.test_fraction} (seed {config.split_seed})")
        training = config.training
        print(f"\n🤖 Trainer: {training.trainer}")
        print(f"   Max iterations: {training.max_iterations}")
        print(f"   L2 regularization: {training.l2_regularization}")
        print(f"   Convergence tolerance: {training.convergence_tolerance}")
        print(f"\n🔤 Featurizer: {config.featurizer}")

    print("=" * 70)
