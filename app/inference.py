"""
Inference module for sentiment classification.
Scores single texts or batches with a trained ModelArtifact.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional

from models.linear_model import ModelArtifact, sigmoid

from .label_mappings import get_sentiment_description, get_sentiment_label


@dataclass(frozen=True)
class PredictionResult:
    """Prediction for one input text."""
    text: str
    predicted_label: bool
    probability: float
    raw_score: float

    @property
    def label(self) -> str:
        return get_sentiment_label(self.predicted_label)

    def to_dict(self) -> Dict:
        result = asdict(self)
        result['label'] = self.label
        return result


class SentimentPredictor:
    """
    Prediction engine wrapping a trained model.

    The model is read-only, so one predictor can serve any number of
    concurrent calls.

    Example:
        >>> predictor = SentimentPredictor(load_model('models/model.npz'))
        >>> result = predictor.predict_one("The pizza was amazing.")
        >>> print(result.label)  # "Positive"
        >>> print(result.probability)  # 0.93
    """

    def __init__(
        self,
        model: ModelArtifact,
        threshold: float = 0.5,
        num_workers: Optional[int] = None
    ):
        """
        Initialize predictor.

        Args:
            model: Trained model
            threshold: Probability at or above which a text is positive
            num_workers: Threads used by predict_batch (None or 1 runs inline)
        """
        self.model = model
        self.threshold = threshold
        self.num_workers = num_workers

    def predict_one(self, text: str) -> PredictionResult:
        """
        Predict the sentiment of a single text.

        Raises:
            InvalidInputError: If text is None or not a string
        """
        raw_score = self.model.score(text)
        probability = sigmoid(raw_score)
        return PredictionResult(
            text=text,
            predicted_label=probability >= self.threshold,
            probability=probability,
            raw_score=raw_score
        )

    def predict_batch(self, texts: Iterable[str]) -> List[PredictionResult]:
        """
        Predict a batch of texts.

        Returns:
            One PredictionResult per input, in input order
        """
        texts = list(texts)
        if self.num_workers and self.num_workers > 1 and len(texts) > 1:
            with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
                return list(executor.map(self.predict_one, texts))
        return [self.predict_one(text) for text in texts]

    def classify(self, text: str) -> Dict:
        """
        Classify sentiment of input text for display.

        Returns:
            Dictionary containing:
                - text: The input text
                - label: Human-readable sentiment label
                - probability: Probability of positive sentiment
                - confidence: Probability of the predicted label
                - description: Detailed description of prediction
        """
        result = self.predict_one(text)
        confidence = result.probability if result.predicted_label else 1.0 - result.probability
        return {
            'text': text,
            'label': result.label,
            'probability': result.probability,
            'confidence': confidence,
            'description': get_sentiment_description(result.predicted_label)
        }


def predict_one(model: ModelArtifact, text: str) -> PredictionResult:
    """Predict the sentiment of ``text`` with ``model``."""
    return SentimentPredictor(model).predict_one(text)


def predict_batch(
    model: ModelArtifact,
    texts: Iterable[str],
    num_workers: Optional[int] = None
) -> List[PredictionResult]:
    """Predict each of ``texts`` with ``model``, preserving order."""
    return SentimentPredictor(model, num_workers=num_workers).predict_batch(texts)
