"""
Test suite for the text featurizer.
"""
import numpy as np
import pytest
from sklearn.feature_extraction.text import CountVectorizer

from models.featurizer import (
    OOV_INDEX,
    FeaturizerState,
    TextFeaturizer,
    preprocess,
    tokenize
)
from utils.errors import InvalidInputError


MIXED_CORPUS = [
    "The pizza was amazing, great food!",
    "This was a horrible meal",
    "A carne estava ruim",
    "Não vou comer aqui de novo.",
]


class TestTokenize:
    """Tokenization and term naming."""

    def test_case_folds_and_splits_on_punctuation(self):
        assert tokenize("Hello, WORLD! It's") == ["hello", "world", "it", "s"]

    def test_non_ascii_tokens(self):
        assert tokenize("Ça va? A refeição estava ótima") == [
            "ça", "va", "a", "refeição", "estava", "ótima"
        ]

    def test_preprocess_drops_punctuation(self):
        assert preprocess("Good,  FOOD!") == "good food"

    def test_feature_names(self):
        state = TextFeaturizer(word_ngram=2, char_ngram=3).fit(["good food"])
        assert state.feature_names == [
            "<oov>",
            "w:food", "w:good", "w:good food",
            "c: fo", "c: go", "c:foo", "c:goo", "c:od ", "c:ood",
        ]

    def test_word_vocabulary_matches_count_vectorizer(self):
        state = TextFeaturizer(word_ngram=2, char_ngram=0).fit(MIXED_CORPUS)
        reference = CountVectorizer(ngram_range=(1, 2), token_pattern=r"(?u)\w+")
        reference.fit(MIXED_CORPUS)
        assert dict(state.word_vocabulary) == reference.vocabulary_


class TestTextFeaturizer:
    """Fitting and transforming."""

    def test_dimension_is_vocabulary_plus_oov(self):
        state = TextFeaturizer().fit(["good food", "bad food"])
        assert state.dimension == len(state.word_vocabulary) + len(state.char_vocabulary) + 1
        assert state.feature_names[OOV_INDEX] == "<oov>"
        assert len(state.feature_names) == state.dimension

    def test_vectors_share_dimension(self):
        featurizer = TextFeaturizer()
        state = featurizer.fit(["good food", "bad food"])
        for text in ["good food", "something else entirely", ""]:
            assert featurizer.transform(text, state).shape == (state.dimension,)

    def test_transform_is_deterministic(self):
        featurizer = TextFeaturizer()
        state = featurizer.fit(["the pizza was amazing", "the steak was awful"])
        first = featurizer.transform("the pizza was awful", state)
        second = featurizer.transform("the pizza was awful", state)
        assert np.array_equal(first, second)

    def test_fit_is_deterministic_across_orderings(self):
        texts = ["good food", "bad food", "great service"]
        a = TextFeaturizer().fit(texts)
        b = TextFeaturizer().fit(list(reversed(texts)))
        assert a == b
        assert a.feature_names == b.feature_names

    def test_unseen_terms_go_to_oov_bucket(self):
        featurizer = TextFeaturizer(char_ngram=0)
        state = featurizer.fit(["good food"])
        vector = featurizer.transform("zzz", state)
        assert vector[OOV_INDEX] > 0
        assert np.count_nonzero(vector) == 1

    def test_only_training_text_enters_vocabulary(self):
        featurizer = TextFeaturizer(char_ngram=0)
        state = featurizer.fit(["good food"])
        featurizer.transform("spaghetti", state)
        assert "spaghetti" not in state.word_vocabulary

    def test_empty_string_is_zero_vector(self):
        featurizer = TextFeaturizer()
        state = featurizer.fit(["good food"])
        vector = featurizer.transform("", state)
        assert not vector.any()

    def test_none_raises_invalid_input(self):
        featurizer = TextFeaturizer()
        state = featurizer.fit(["good food"])
        with pytest.raises(InvalidInputError):
            featurizer.transform(None, state)

    def test_non_string_raises_invalid_input(self):
        featurizer = TextFeaturizer()
        state = featurizer.fit(["good food"])
        with pytest.raises(InvalidInputError):
            featurizer.transform(42, state)

    def test_none_in_corpus_raises_invalid_input(self):
        with pytest.raises(InvalidInputError):
            TextFeaturizer().fit(["good food", None])

    def test_vectors_are_l2_normalized(self):
        featurizer = TextFeaturizer()
        state = featurizer.fit(["good food", "bad food"])
        vector = featurizer.transform("good food and more", state)
        assert np.linalg.norm(vector) == pytest.approx(1.0)

    def test_raw_counts_without_normalization(self):
        featurizer = TextFeaturizer(char_ngram=0, word_ngram=1, normalize=False)
        state = featurizer.fit(["food"])
        vector = featurizer.transform("food food", state)
        assert vector[state.feature_names.index("w:food")] == 2.0

    def test_min_df_drops_rare_terms(self):
        featurizer = TextFeaturizer(char_ngram=0, word_ngram=1, min_df=2)
        state = featurizer.fit(["good food", "bad food"])
        assert dict(state.word_vocabulary) == {"food": 0}

    def test_max_features_keeps_most_frequent(self):
        featurizer = TextFeaturizer(char_ngram=0, word_ngram=1, max_features=1)
        state = featurizer.fit(["good food", "bad food", "food"])
        assert dict(state.word_vocabulary) == {"food": 0}

    def test_transform_batch_shape(self):
        featurizer = TextFeaturizer()
        state, matrix = featurizer.fit_transform(["good food", "bad food", "fine"])
        assert matrix.shape == (3, state.dimension)
        assert TextFeaturizer.transform_batch([], state).shape == (0, state.dimension)

    def test_invalid_settings(self):
        with pytest.raises(ValueError):
            TextFeaturizer(word_ngram=0, char_ngram=0)
        with pytest.raises(ValueError):
            TextFeaturizer(min_df=0)


class TestFeaturizerState:
    """Serialization of the fitted state."""

    def test_dict_round_trip(self):
        state = TextFeaturizer(word_ngram=1, char_ngram=4).fit(["great pasta", "awful pizza"])
        restored = FeaturizerState.from_dict(state.to_dict())
        assert restored == state

    def test_vocabularies_are_read_only(self):
        state = TextFeaturizer().fit(["good food", "bad food"])
        with pytest.raises(TypeError):
            state.word_vocabulary["new"] = 99
        with pytest.raises(TypeError):
            state.char_vocabulary["new"] = 99

    def test_caller_dict_is_copied(self):
        vocabulary = {"food": 0}
        state = FeaturizerState(word_vocabulary=vocabulary, char_ngram=0)
        vocabulary["good"] = 1
        assert state.dimension == 2

    def test_restored_state_transforms_identically(self):
        featurizer = TextFeaturizer()
        state = featurizer.fit(["great pasta", "awful pizza"])
        restored = FeaturizerState.from_dict(state.to_dict())
        text = "great pizza, awful service"
        assert np.array_equal(featurizer.transform(text, state),
                              featurizer.transform(text, restored))
