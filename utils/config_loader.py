"""
Configuration loader for pipeline, featurizer and training parameters.
"""

import json
import os
from dataclasses import asdict, fields
from typing import Any, Dict, Optional

from app.config import FEATURIZER_DEFAULTS, PipelineConfig
from training.trainer_base import TrainingConfig


PIPELINE_KEYS = {f.name for f in fields(PipelineConfig)} - {'featurizer', 'training'}
TRAINING_KEYS = {f.name for f in fields(TrainingConfig)}


def _check_keys(section: str, values: Dict[str, Any], allowed) -> None:
    unknown = set(values) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown {section} settings: {sorted(unknown)}. "
                         f"Available settings: {sorted(allowed)}")


class ConfigLoader:
    """
    Load a JSON run configuration.

    The file may contain three optional sections::

        {
          "pipeline": {"data_path": "...", "test_fraction": 0.7},
          "featurizer": {"word_ngram": 2, "char_ngram": 3},
          "training": {"max_iterations": 100, "l2_regularization": 0.001}
        }
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self.raw_config: Dict[str, Any] = {}
        if config_path:
            self._load_config()

    def _load_config(self):
        """Load the configuration file."""
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            raw = json.load(f)

        if not isinstance(raw, dict):
            raise ValueError(f"Configuration file {self.config_path} must hold a JSON object")
        _check_keys('top-level', raw, {'pipeline', 'featurizer', 'training'})
        self.raw_config = raw

    def get_training_config(
        self,
        override_params: Optional[Dict[str, Any]] = None
    ) -> TrainingConfig:
        """
        Get training configuration with optional overrides.

        Args:
            override_params: Parameters to override file values

        Returns:
            TrainingConfig
        """
        training = dict(self.raw_config.get('training', {}))
        if override_params:
            training.update(override_params)
        _check_keys('training', training, TRAINING_KEYS)
        return TrainingConfig(**training)

    def get_featurizer_config(
        self,
        override_params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Featurizer settings: defaults, then file values, then overrides."""
        featurizer = dict(FEATURIZER_DEFAULTS)
        file_values = self.raw_config.get('featurizer', {})
        _check_keys('featurizer', file_values, FEATURIZER_DEFAULTS)
        featurizer.update(file_values)
        if override_params:
            _check_keys('featurizer', override_params, FEATURIZER_DEFAULTS)
            featurizer.update(override_params)
        return featurizer

    def get_pipeline_config(
        self,
        override_params: Optional[Dict[str, Any]] = None,
        training_overrides: Optional[Dict[str, Any]] = None,
        featurizer_overrides: Optional[Dict[str, Any]] = None
    ) -> PipelineConfig:
        """
        Build the full run configuration.

        Args:
            override_params: Pipeline-level overrides (e.g. from the CLI)
            training_overrides: TrainingConfig overrides
            featurizer_overrides: Featurizer overrides

        Returns:
            PipelineConfig
        """
        pipeline = dict(self.raw_config.get('pipeline', {}))
        if override_params:
            pipeline.update(override_params)
        _check_keys('pipeline', pipeline, PIPELINE_KEYS)

        if 'batch_texts' in pipeline:
            pipeline['batch_texts'] = tuple(pipeline['batch_texts'])

        return PipelineConfig(
            featurizer=self.get_featurizer_config(featurizer_overrides),
            training=self.get_training_config(training_overrides),
            **pipeline
        )

    @staticmethod
    def save_config(config: PipelineConfig, path: str):
        """Save a run configuration in the format read by this loader."""
        pipeline = {
            key: value for key, value in asdict(config).items()
            if key in PIPELINE_KEYS
        }
        pipeline['batch_texts'] = list(config.batch_texts)

        data = {
            'pipeline': pipeline,
            'featurizer': dict(config.featurizer),
            'training': asdict(config.training)
        }

        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        print(f"Configuration saved to {path}")

