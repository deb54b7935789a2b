"""
Saving and loading trained sentiment models.

A model is stored as a single ``.npz`` archive holding the weight
vector, the bias and a JSON header with the featurizer state and
training metadata.
"""

import json
import os
import zipfile
import zlib
from typing import Any, Dict, Tuple

import numpy as np

from models.featurizer import FeaturizerState
from models.linear_model import ModelArtifact
from utils.errors import CorruptArtifactError


ARTIFACT_FORMAT = 'sentiment-linear'

# Everything np.load / zipfile / json can raise on damaged bytes
_DECODE_ERRORS = (
    OSError,
    EOFError,
    ValueError,
    KeyError,
    TypeError,
    zipfile.BadZipFile,
    zlib.error,
)


def _json_default(value):
    if isinstance(value, np.generic):
        return value.item()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def save_model(model: ModelArtifact, destination: str) -> None:
    """
    Persist a model to ``destination``.

    The archive is written to a temporary sibling file and renamed into
    place, so an interrupted save never leaves a partial artifact.

    Args:
        model: Trained model
        destination: Target file path
    """
    header = {
        'format': ARTIFACT_FORMAT,
        'dimension': model.dimension,
        'trainer': model.trainer,
        'featurizer': model.featurizer_state.to_dict(),
        'metadata': dict(model.metadata)
    }

    directory = os.path.dirname(os.path.abspath(destination))
    os.makedirs(directory, exist_ok=True)
    tmp_path = f"{destination}.tmp"

    try:
        with open(tmp_path, 'wb') as f:
            np.savez_compressed(
                f,
                weights=np.asarray(model.weights, dtype=np.float64),
                bias=np.array([model.bias], dtype=np.float64),
                header=np.array(json.dumps(header, default=_json_default, ensure_ascii=False))
            )
        os.replace(tmp_path, destination)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def _read_archive(source: str) -> Tuple[np.ndarray, np.ndarray, Dict[str, Any]]:
    if not os.path.exists(source):
        raise FileNotFoundError(f"Model artifact not found: {source}")

    try:
        with np.load(source, allow_pickle=False) as archive:
            weights = np.array(archive['weights'])
            bias = np.array(archive['bias'])
            header = json.loads(str(archive['header']))
    except _DECODE_ERRORS as e:
        raise CorruptArtifactError(
            f"Cannot decode model artifact {source}: {e}",
            hint="The file is truncated or was not written by save_model."
        ) from e

    if not isinstance(header, dict) or header.get('format') != ARTIFACT_FORMAT:
        raise CorruptArtifactError(f"Model artifact {source} has an unknown format header")

    return weights, bias, header


def load_model(source: str) -> ModelArtifact:
    """
    Load a model written by :func:`save_model`.

    Args:
        source: Path to the ``.npz`` artifact

    Returns:
        ModelArtifact

    Raises:
        FileNotFoundError: If the file does not exist
        CorruptArtifactError: If the file is malformed or inconsistent
    """
    weights, bias, header = _read_archive(source)

    try:
        state = FeaturizerState.from_dict(header['featurizer'])
    except _DECODE_ERRORS as e:
        raise CorruptArtifactError(f"Invalid featurizer state in {source}: {e}") from e

    if weights.ndim != 1 or weights.dtype.kind != 'f':
        raise CorruptArtifactError(f"Weights in {source} are not a float vector")
    if bias.shape != (1,) or bias.dtype.kind != 'f':
        raise CorruptArtifactError(f"Bias in {source} is not a single float")
    if weights.shape[0] != state.dimension or header.get('dimension') != state.dimension:
        raise CorruptArtifactError(
            f"Dimension mismatch in {source}: featurizer has {state.dimension} "
            f"features but weights have {weights.shape[0]}"
        )
    if not (np.all(np.isfinite(weights)) and np.isfinite(bias[0])):
        raise CorruptArtifactError(f"Weights in {source} contain NaN or infinite values")

    return ModelArtifact(
        featurizer_state=state,
        weights=weights,
        bias=float(bias[0]),
        trainer=str(header.get('trainer', 'unknown')),
        metadata=dict(header.get('metadata') or {})
    )


def get_model_info(source: str) -> Dict[str, Any]:
    """
    Get information about a saved model without building it.

    Args:
        source: Path to the ``.npz`` artifact

    Returns:
        Dictionary containing model metadata
    """
    weights, _, header = _read_archive(source)
    featurizer = header.get('featurizer') or {}

    return {
        'checkpoint_path': source,
        'size_bytes': os.path.getsize(source),
        'trainer': header.get('trainer', 'unknown'),
        'dimension': header.get('dimension'),
        'num_weights': int(weights.shape[0]) if weights.ndim == 1 else None,
        'vocabulary_size': (len(featurizer.get('word_vocabulary', []))
                            + len(featurizer.get('char_vocabulary', []))),
        'word_ngram': featurizer.get('word_ngram'),
        'char_ngram': featurizer.get('char_ngram'),
        'metadata': header.get('metadata', {})
    }
