"""
Training utilities package.
"""

from .data_loader import (
    LabeledRecord,
    TrainTestData,
    load_labeled_records,
    records_from_dataframe,
    split_records
)
from .visualization import plot_training_history

__all__ = [
    'LabeledRecord',
    'TrainTestData',
    'load_labeled_records',
    'records_from_dataframe',
    'split_records',
    'plot_training_history'
]
