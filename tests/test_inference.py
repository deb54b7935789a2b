"""
Test suite for the prediction engine.
"""
import pytest

from app.examples import SAMPLE_BATCH_TEXTS, SAMPLE_TEXTS_PT
from app.inference import PredictionResult, SentimentPredictor, predict_batch, predict_one
from app.label_mappings import get_sentiment_description, get_sentiment_label
from models.linear_model import sigmoid
from utils.errors import InvalidInputError


class TestPredictOne:
    """Single-text prediction."""

    def test_result_fields(self, trained_model):
        result = predict_one(trained_model, "The pizza was amazing.")
        assert isinstance(result, PredictionResult)
        assert result.text == "The pizza was amazing."
        assert 0.0 <= result.probability <= 1.0
        assert result.probability == pytest.approx(sigmoid(result.raw_score))
        assert result.predicted_label == (result.probability >= 0.5)

    def test_clear_sentiment(self, trained_model):
        assert predict_one(trained_model, "good food").predicted_label is True
        assert predict_one(trained_model, "bad food").predicted_label is False

    def test_empty_text_scores_bias(self, trained_model):
        result = predict_one(trained_model, "")
        assert result.raw_score == pytest.approx(trained_model.bias)

    def test_none_raises(self, trained_model):
        with pytest.raises(InvalidInputError):
            predict_one(trained_model, None)

    def test_non_ascii_text(self, trained_model):
        for text in SAMPLE_TEXTS_PT:
            result = predict_one(trained_model, text)
            assert 0.0 <= result.probability <= 1.0

    def test_threshold(self, trained_model):
        predictor = SentimentPredictor(trained_model, threshold=1.0)
        assert predictor.predict_one("good food").predicted_label is False


class TestPredictBatch:
    """Batch prediction."""

    def test_matches_single_predictions(self, trained_model):
        texts = list(SAMPLE_BATCH_TEXTS)
        batch = predict_batch(trained_model, texts)
        assert batch == [predict_one(trained_model, t) for t in texts]

    def test_preserves_order_and_length(self, trained_model):
        texts = ["bad food", "good food", "", "bad food"]
        results = predict_batch(trained_model, texts)
        assert [r.text for r in results] == texts
        assert results[0] == results[3]

    def test_threaded_matches_sequential(self, trained_model):
        texts = list(SAMPLE_BATCH_TEXTS) * 5
        sequential = predict_batch(trained_model, texts)
        threaded = predict_batch(trained_model, texts, num_workers=4)
        assert threaded == sequential

    def test_empty_batch(self, trained_model):
        assert predict_batch(trained_model, []) == []

    def test_invalid_member_raises(self, trained_model):
        with pytest.raises(InvalidInputError):
            predict_batch(trained_model, ["good food", None])


class TestClassify:
    """Display-oriented classification."""

    def test_classify_dict(self, trained_model):
        result = SentimentPredictor(trained_model).classify("bad food")
        assert result['label'] == "Negative"
        assert result['confidence'] == pytest.approx(1.0 - result['probability'])
        assert result['description'] == get_sentiment_description(False)

    def test_to_dict_includes_label(self, trained_model):
        data = predict_one(trained_model, "good food").to_dict()
        assert data['label'] == "Positive"
        assert set(data) == {'text', 'predicted_label', 'probability', 'raw_score', 'label'}

    def test_label_names(self):
        assert get_sentiment_label(True) == "Positive"
        assert get_sentiment_label(False) == "Negative"
