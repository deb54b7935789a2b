"""
Data loading utilities for tab-separated sentiment datasets.

Each line of a dataset file holds ``text<TAB>label`` with no header,
label ``1`` for positive and ``0`` for negative (the Yelp / Amazon /
IMDB "labelled sentences" format).
"""

import csv
import math
import os
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split


LABEL_VALUES = {
    '1': True,
    '0': False,
    'true': True,
    'false': False
}


@dataclass(frozen=True)
class LabeledRecord:
    """A sentence and its sentiment, True for positive."""
    text: str
    label: bool


class TrainTestData(NamedTuple):
    train: List[LabeledRecord]
    test: List[LabeledRecord]


def parse_label(value, line_number: int) -> bool:
    """Convert a raw label cell to bool, raising ValueError on anything else."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        raise ValueError(f"Record {line_number} has no label")
    key = str(value).strip().lower()
    if key not in LABEL_VALUES:
        raise ValueError(f"Record {line_number} has a non-binary label: {value!r}")
    return LABEL_VALUES[key]


def records_from_dataframe(
    df: pd.DataFrame,
    text_column: str = 'text',
    label_column: str = 'label'
) -> List[LabeledRecord]:
    """Build LabeledRecords from two DataFrame columns."""
    records = []
    for line_number, (text, label) in enumerate(
        zip(df[text_column], df[label_column]), start=1
    ):
        text = '' if text is None or (isinstance(text, float) and math.isnan(text)) else str(text)
        records.append(LabeledRecord(text=text, label=parse_label(label, line_number)))
    return records


def load_labeled_records(data_path: str, encoding: str = 'utf-8') -> List[LabeledRecord]:
    """
    Load a tab-separated dataset file.

    Args:
        data_path: Path to the ``.txt``/``.tsv`` file
        encoding: File encoding

    Returns:
        List of LabeledRecord in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a line is malformed or has a non-binary label
    """
    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Dataset not found: {data_path}")

    try:
        df = pd.read_csv(
            data_path,
            sep='\t',
            header=None,
            names=['text', 'label'],
            # never promote a leading field to an implicit index
            index_col=False,
            dtype=str,
            quoting=csv.QUOTE_NONE,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding=encoding
        )
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as e:
        raise ValueError(f"Malformed dataset file {data_path}: {e}") from e

    return records_from_dataframe(df)


def split_records(
    records: Iterable[LabeledRecord],
    test_fraction: float = 0.7,
    seed: int = 42
) -> TrainTestData:
    """
    Partition records into disjoint train and test subsets.

    ``ceil(test_fraction * n)`` records go to the test subset, chosen by
    ``train_test_split`` with ``random_state=seed``. Both subsets keep the
    input order.

    Args:
        records: Full dataset
        test_fraction: Share of records held out for testing, in [0, 1]
        seed: random_state for train_test_split

    Returns:
        TrainTestData(train, test)
    """
    if not 0.0 <= test_fraction <= 1.0:
        raise ValueError(f"test_fraction must be in [0, 1], got {test_fraction}")

    records = list(records)
    n = len(records)
    # round() guards against 0.7 * 10 == 7.000000000000001
    n_test = min(n, int(math.ceil(round(test_fraction * n, 9))))

    indices = np.arange(n)
    if n_test == 0:
        test_indices = set()
    elif n_test == n:
        test_indices = set(indices.tolist())
    else:
        _, held_out = train_test_split(indices, test_size=n_test, random_state=seed, shuffle=True)
        test_indices = set(held_out.tolist())

    train = [r for i, r in enumerate(records) if i not in test_indices]
    test = [r for i, r in enumerate(records) if i in test_indices]

    return TrainTestData(train=train, test=test)
