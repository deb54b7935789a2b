"""
Models package: text featurizer and the trained linear sentiment model.
"""

from .featurizer import TextFeaturizer, FeaturizerState, tokenize
from .linear_model import ModelArtifact, sigmoid

__all__ = ['TextFeaturizer', 'FeaturizerState', 'tokenize', 'ModelArtifact', 'sigmoid']
