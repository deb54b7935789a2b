"""
Training module for linear sentiment classifiers.
"""

from .trainer_base import BaseTrainer, TrainingConfig
from .train_sdca import SdcaLogisticTrainer
from .train_lbfgs import LbfgsLogisticTrainer
from .train import train, train_model, get_trainer, TRAINERS

__all__ = [
    'BaseTrainer',
    'TrainingConfig',
    'SdcaLogisticTrainer',
    'LbfgsLogisticTrainer',
    'train',
    'train_model',
    'get_trainer',
    'TRAINERS',
]
