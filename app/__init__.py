"""
Sentiment Classification App

This package provides:
1. Prediction with a trained binary sentiment model (single and batch)
2. Saving and loading model artifacts
3. The end-to-end train / evaluate / predict pipeline and its CLI
"""

__version__ = "1.0.0"

from .inference import SentimentPredictor, PredictionResult, predict_one, predict_batch
from .model_loader import save_model, load_model, get_model_info
from .label_mappings import SENTIMENT_LABELS

__all__ = [
    'SentimentPredictor',
    'PredictionResult',
    'predict_one',
    'predict_batch',
    'save_model',
    'load_model',
    'get_model_info',
    'SENTIMENT_LABELS'
]
