"""
High-level pipeline orchestration.

Train mode:  load data -> split -> featurize + train -> save -> evaluate
             -> single-sample prediction -> batch-sample prediction
Reuse mode:  load saved model -> batch-sample prediction

Core errors propagate to the caller unchanged. The model is saved only
after training succeeded, so a failed run never leaves an artifact.
"""

import json
import os
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from evaluation.eval import (
    Metrics,
    ModelEvaluator,
    format_metrics,
    plot_confusion_matrix,
    plot_roc_curve
)
from models.featurizer import TextFeaturizer
from models.linear_model import ModelArtifact
from training.train import train_model
from training.utils.data_loader import load_labeled_records, split_records
from training.utils.visualization import plot_training_history

from .config import OUTPUT_FORMAT, PipelineConfig, print_config
from .inference import PredictionResult, SentimentPredictor
from .model_loader import load_model, save_model


@dataclass
class PipelineResult:
    """Outputs of one pipeline run."""
    model: ModelArtifact
    metrics: Optional[Metrics] = None
    single_prediction: Optional[PredictionResult] = None
    batch_predictions: List[PredictionResult] = field(default_factory=list)
    training_history: Dict[str, list] = field(default_factory=dict)
    num_train: int = 0
    num_test: int = 0
    elapsed_seconds: float = 0.0


def banner(title: str) -> str:
    edge = "=" * OUTPUT_FORMAT['separator_width']
    return f"{edge} {title} {edge}"


def format_prediction(result: PredictionResult) -> str:
    return (f"Sentiment: {result.text} | Prediction: {result.label} | "
            f"Probability: {result.probability} ")


def report_single(predictor: SentimentPredictor, text: str, verbose: bool = True) -> PredictionResult:
    """Predict one sample statement and print it."""
    result = predictor.predict_one(text)
    if verbose:
        print()
        print(banner("Prediction Test of model with a single sample and test dataset"))
        print()
        print(format_prediction(result))
        print(banner("End of Predictions"))
        print()
    return result


def report_batch(predictor: SentimentPredictor, texts, verbose: bool = True) -> List[PredictionResult]:
    """Predict several sample statements and print them."""
    results = predictor.predict_batch(texts)
    if verbose:
        print()
        print(banner("Prediction Test of loaded model with multiple samples"))
        for result in results:
            print(format_prediction(result))
        print(banner("End of predictions"))
    return results


def report_evaluation(model: ModelArtifact, test_records, verbose: bool = True) -> Metrics:
    """Evaluate on the test split and print the metrics block."""
    if verbose:
        print(banner("Evaluating Model accuracy with Test data"))
    metrics = ModelEvaluator(model).evaluate(test_records)
    if verbose:
        print()
        print(format_metrics(metrics))
        print(banner("End of model evaluation"))
    return metrics


def save_metrics(metrics: Metrics, path: str):
    """Write metrics to a JSON file."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(metrics.to_dict(), f, indent=2)
    print(f"Metrics saved to {path}")


def save_plots(plot_dir: str, model: ModelArtifact, test_records, metrics: Metrics,
               history: Dict[str, list]):
    """Write training-history, confusion-matrix and ROC figures to ``plot_dir``."""
    os.makedirs(plot_dir, exist_ok=True)
    if history.get('primal'):
        plot_training_history(history, save_path=os.path.join(plot_dir, 'training_history.png'))
    plot_confusion_matrix(
        metrics.confusion_matrix,
        save_path=os.path.join(plot_dir, 'confusion_matrix.png')
    )
    plot_roc_curve(model, test_records, save_path=os.path.join(plot_dir, 'roc_curve.png'))


def run_training_pipeline(config: PipelineConfig) -> PipelineResult:
    """
    Train, persist, evaluate and run sample predictions.

    Args:
        config: Run configuration

    Returns:
        PipelineResult

    Raises:
        TrainingError: If the training split cannot be trained on
        InvalidInputError: If a record or sample is not text
        FileNotFoundError: If the dataset is missing
    """
    start_time = time.time()
    verbose = config.verbose

    records = load_labeled_records(config.data_path)
    split = split_records(records, test_fraction=config.test_fraction, seed=config.split_seed)
    if verbose:
        print(f"Loaded {len(records)} records: {len(split.train)} train / {len(split.test)} test")
        print(banner("Create and Train the Model"))

    model, history = train_model(
        split.train,
        config=config.training,
        featurizer=TextFeaturizer(**config.featurizer),
        verbose=verbose
    )

    if verbose:
        print(banner("End of training"))
        print()

    save_model(model, config.model_path)
    if verbose:
        print(f"Model saved to {config.model_path}")

    metrics = report_evaluation(model, split.test, verbose)

    predictor = SentimentPredictor(model, num_workers=config.num_workers)
    single = report_single(predictor, config.single_text, verbose)
    batch = report_batch(predictor, config.batch_texts, verbose)

    if config.metrics_path:
        save_metrics(metrics, config.metrics_path)
    if config.plot_dir:
        save_plots(config.plot_dir, model, split.test, metrics, history)

    return PipelineResult(
        model=model,
        metrics=metrics,
        single_prediction=single,
        batch_predictions=batch,
        training_history=history,
        num_train=len(split.train),
        num_test=len(split.test),
        elapsed_seconds=time.time() - start_time
    )


def run_reuse_pipeline(config: PipelineConfig) -> PipelineResult:
    """
    Load a persisted model and run the batch sample predictions.

    Raises:
        FileNotFoundError: If the model artifact is missing
        CorruptArtifactError: If the artifact cannot be decoded
    """
    start_time = time.time()

    model = load_model(config.model_path)
    if config.verbose:
        print(f"Loaded model from {config.model_path} ({model.dimension} features)")

    predictor = SentimentPredictor(model, num_workers=config.num_workers)
    batch = report_batch(predictor, config.batch_texts, config.verbose)

    return PipelineResult(
        model=model,
        batch_predictions=batch,
        elapsed_seconds=time.time() - start_time
    )


def run_pipeline(config: PipelineConfig) -> PipelineResult:
    """Run reuse mode if ``config.use_trained_model`` is set, train mode otherwise."""
    if config.verbose:
        print_config(config)

    if config.use_trained_model:
        result = run_reuse_pipeline(config)
    else:
        result = run_training_pipeline(config)

    if config.verbose:
        print(f"\nElapsed: {result.elapsed_seconds * 1000:.0f} ms")
    return result
