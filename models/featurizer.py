"""
Text featurizer turning raw sentences into fixed-length count vectors.

Two scikit-learn ``CountVectorizer`` instances share one preprocessing
step: a word n-gram vectorizer and a ``char_wb`` vectorizer for
character n-grams inside tokens. Their vocabularies are fitted on
training text only; anything unseen at transform time is counted in the
reserved out-of-vocabulary column 0.

Column layout: ``[oov | word terms | char terms]``.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer
from sklearn.preprocessing import normalize as l2_normalize

from utils.errors import InvalidInputError


TOKEN_PATTERN = re.compile(r"\w+", re.UNICODE)
WORD_TOKEN_PATTERN = r"(?u)\w+"
OOV_INDEX = 0
OOV_NAME = "<oov>"
WORD_PREFIX = "w:"
CHAR_PREFIX = "c:"


def tokenize(text: str) -> List[str]:
    """Case-fold and split text on whitespace and punctuation."""
    return TOKEN_PATTERN.findall(text.casefold())


def preprocess(text: str) -> str:
    """Case-folded tokens joined by single spaces; punctuation is dropped."""
    return " ".join(tokenize(text))


def _check_text(text) -> str:
    if text is None:
        raise InvalidInputError("Text input is None")
    if not isinstance(text, str):
        raise InvalidInputError(
            f"Text input must be a string, got {type(text).__name__}"
        )
    return text


def build_word_vectorizer(word_ngram: int, vocabulary=None, min_df: int = 1,
                          max_features: Optional[int] = None) -> CountVectorizer:
    return CountVectorizer(
        preprocessor=preprocess,
        token_pattern=WORD_TOKEN_PATTERN,
        ngram_range=(1, word_ngram),
        min_df=min_df,
        max_features=max_features,
        vocabulary=vocabulary,
        dtype=np.float64
    )


def build_char_vectorizer(char_ngram: int, vocabulary=None, min_df: int = 1,
                          max_features: Optional[int] = None) -> CountVectorizer:
    return CountVectorizer(
        preprocessor=preprocess,
        analyzer='char_wb',
        ngram_range=(char_ngram, char_ngram),
        min_df=min_df,
        max_features=max_features,
        vocabulary=vocabulary,
        dtype=np.float64
    )


@dataclass(frozen=True)
class FeaturizerState:
    """
    Fitted vocabularies plus the settings needed to reproduce vectors.

    Each vocabulary maps a term to its ``vocabulary_`` index inside its
    own vectorizer.
    """
    word_vocabulary: Mapping[str, int] = field(default_factory=dict)
    char_vocabulary: Mapping[str, int] = field(default_factory=dict)
    word_ngram: int = 2
    char_ngram: int = 3
    normalize: bool = True
    _vectorizers: tuple = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self):
        word_vocabulary = MappingProxyType(dict(self.word_vocabulary))
        char_vocabulary = MappingProxyType(dict(self.char_vocabulary))
        object.__setattr__(self, 'word_vocabulary', word_vocabulary)
        object.__setattr__(self, 'char_vocabulary', char_vocabulary)

        families = []
        if self.word_ngram > 0:
            families.append((build_word_vectorizer, self.word_ngram, word_vocabulary))
        if self.char_ngram > 0:
            families.append((build_char_vectorizer, self.char_ngram, char_vocabulary))

        vectorizers = []
        for build, ngram, vocabulary in families:
            # an empty vocabulary is not a valid CountVectorizer vocabulary
            fitted = build(ngram, vocabulary=vocabulary) if vocabulary else None
            vectorizers.append((build(ngram).build_analyzer(), vocabulary, fitted))
        object.__setattr__(self, '_vectorizers', tuple(vectorizers))

    @property
    def dimension(self) -> int:
        # +1 for the out-of-vocabulary bucket
        return 1 + len(self.word_vocabulary) + len(self.char_vocabulary)

    @property
    def feature_names(self) -> List[str]:
        """Name of every column, ``w:``/``c:`` prefixed, OOV first."""
        return ([OOV_NAME]
                + [WORD_PREFIX + t for t in _ordered_terms(self.word_vocabulary)]
                + [CHAR_PREFIX + t for t in _ordered_terms(self.char_vocabulary)])

    def to_dict(self) -> Dict:
        return {
            'word_vocabulary': _ordered_terms(self.word_vocabulary),
            'char_vocabulary': _ordered_terms(self.char_vocabulary),
            'word_ngram': self.word_ngram,
            'char_ngram': self.char_ngram,
            'normalize': self.normalize
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'FeaturizerState':
        return cls(
            word_vocabulary={term: i for i, term in enumerate(data['word_vocabulary'])},
            char_vocabulary={term: i for i, term in enumerate(data['char_vocabulary'])},
            word_ngram=int(data['word_ngram']),
            char_ngram=int(data['char_ngram']),
            normalize=bool(data['normalize'])
        )


def _ordered_terms(vocabulary: Mapping[str, int]) -> List[str]:
    return sorted(vocabulary, key=vocabulary.get)


class TextFeaturizer:
    """
    Bag of word and character n-grams over vocabularies fitted on training text.

    ``min_df`` and ``max_features`` apply to each term family separately.

    Example:
        >>> featurizer = TextFeaturizer()
        >>> state = featurizer.fit(["good food", "bad food"])
        >>> vector = featurizer.transform("good food", state)
        >>> vector.shape == (state.dimension,)
        True
    """

    def __init__(
        self,
        word_ngram: int = 2,
        char_ngram: int = 3,
        min_df: int = 1,
        max_features: Optional[int] = None,
        normalize: bool = True
    ):
        if word_ngram < 0 or char_ngram < 0:
            raise ValueError("n-gram lengths must be non-negative")
        if word_ngram == 0 and char_ngram == 0:
            raise ValueError("At least one of word_ngram or char_ngram must be enabled")
        if min_df < 1:
            raise ValueError(f"min_df must be >= 1, got {min_df}")
        if max_features is not None and max_features < 1:
            raise ValueError(f"max_features must be >= 1, got {max_features}")

        self.word_ngram = word_ngram
        self.char_ngram = char_ngram
        self.min_df = min_df
        self.max_features = max_features
        self.normalize = normalize

    def _fit_vocabulary(self, vectorizer: CountVectorizer, texts: List[str]) -> Dict[str, int]:
        # CountVectorizer refuses a corpus without a single term
        analyzer = vectorizer.build_analyzer()
        if not any(analyzer(text) for text in texts):
            return {}
        vectorizer.fit(texts)
        return {term: int(index) for term, index in vectorizer.vocabulary_.items()}

    def fit(self, training_texts: Iterable[str]) -> FeaturizerState:
        """
        Build the vocabularies from the training corpus.

        Args:
            training_texts: Texts of the training split only

        Returns:
            Fitted FeaturizerState
        """
        texts = [_check_text(text) for text in training_texts]

        word_vocabulary, char_vocabulary = {}, {}
        if self.word_ngram > 0:
            word_vocabulary = self._fit_vocabulary(
                build_word_vectorizer(self.word_ngram, min_df=self.min_df,
                                      max_features=self.max_features),
                texts
            )
        if self.char_ngram > 0:
            char_vocabulary = self._fit_vocabulary(
                build_char_vectorizer(self.char_ngram, min_df=self.min_df,
                                      max_features=self.max_features),
                texts
            )

        return FeaturizerState(
            word_vocabulary=word_vocabulary,
            char_vocabulary=char_vocabulary,
            word_ngram=self.word_ngram,
            char_ngram=self.char_ngram,
            normalize=self.normalize
        )

    @staticmethod
    def transform(text: str, state: FeaturizerState) -> np.ndarray:
        """
        Map text to a feature vector of length ``state.dimension``.

        Empty text yields the zero vector.
        """
        return TextFeaturizer.transform_batch([text], state)[0]

    @classmethod
    def transform_batch(cls, texts: Iterable[str], state: FeaturizerState) -> np.ndarray:
        """Stack vectors for several texts into an (n, dimension) matrix."""
        texts = [_check_text(text) for text in texts]
        if not texts:
            return np.zeros((0, state.dimension), dtype=np.float64)

        oov = np.zeros((len(texts), 1), dtype=np.float64)
        blocks = [oov]
        for analyzer, vocabulary, vectorizer in state._vectorizers:
            for row, text in enumerate(texts):
                oov[row, 0] += sum(1 for term in analyzer(text) if term not in vocabulary)
            if vectorizer is not None:
                blocks.append(vectorizer.transform(texts).toarray())
        matrix = np.hstack(blocks)

        if state.normalize:
            matrix = l2_normalize(matrix, norm='l2', copy=False)
        return matrix

    def fit_transform(self, training_texts: List[str]):
        """Fit on the texts and return ``(state, matrix)``."""
        texts = list(training_texts)
        state = self.fit(texts)
        return state, self.transform_batch(texts, state)
