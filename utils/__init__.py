"""
Shared utilities: error taxonomy and configuration loading.
"""

from .errors import (
    SentimentPipelineError,
    InvalidInputError,
    TrainingError,
    CorruptArtifactError
)

__all__ = [
    'SentimentPipelineError',
    'InvalidInputError',
    'TrainingError',
    'CorruptArtifactError'
]
