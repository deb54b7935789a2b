"""
Error hierarchy for the sentiment pipeline.

Every failure raised by the featurizer, trainers and the persistence
layer derives from ``SentimentPipelineError`` so callers can tell core
errors apart from programming errors and report them by kind.
"""

import textwrap
from typing import Optional


class SentimentPipelineError(RuntimeError):
    """Base error for all pipeline failures."""

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        final_message = message
        if hint:
            final_message = f"{message}\n{self._format_hint(hint)}"
        super().__init__(final_message)
        self.message = message
        self.hint = hint

    @property
    def kind(self) -> str:
        """Short name of the error kind, e.g. ``TrainingError``."""
        return type(self).__name__

    @staticmethod
    def _format_hint(hint: str) -> str:
        return textwrap.indent(f"Hint: {hint}", prefix="  ")


class InvalidInputError(SentimentPipelineError):
    """Raised when text handed to the featurizer is not a string."""


class TrainingError(SentimentPipelineError):
    """Raised when training data is insufficient or inconsistent."""


class CorruptArtifactError(SentimentPipelineError):
    """Raised when a persisted model cannot be decoded."""
