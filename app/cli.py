"""
Command-line interface for the sentiment pipeline.

Usage examples:

1. Train, save, evaluate and run the sample predictions:
   python -m app.cli train --data data/yelp_labelled.txt --model-path checkpoints/model.npz

2. Reuse a saved model for the sample predictions only:
   python -m app.cli train --use-trained-model --model-path checkpoints/model.npz

3. Classify a single text:
   python -m app.cli predict --model-path checkpoints/model.npz --text "The pizza was amazing."

4. Interactive mode:
   python -m app.cli predict --model-path checkpoints/model.npz --interactive

5. Batch processing from file:
   python -m app.cli predict --input-file texts.txt --output-file results.json
"""

import argparse
import json
import sys
from typing import Dict

from utils.config_loader import ConfigLoader
from utils.errors import SentimentPipelineError

from .config import DEFAULT_MODEL_PATH, INFERENCE_CONFIG
from .inference import SentimentPredictor
from .model_loader import load_model
from .pipeline import run_pipeline


def print_separator():
    """Print a visual separator."""
    print("=" * 80)


def print_result(result: Dict):
    """Pretty print a classification result."""
    print_separator()
    print(f"📝 Input: {result['text']}")
    print()
    print(f"💭 Sentiment Classification:")
    print(f"   Label: {result['label']}")
    print(f"   Probability (positive): {result['probability']:.2%}")
    print(f"   Confidence: {result['confidence']:.2%}")
    print(f"   Description: {result['description']}")
    print_separator()


def interactive_mode(predictor: SentimentPredictor):
    """Run in interactive mode for continuous predictions."""
    print("\n🚀 Interactive Classification Mode")
    print("Type 'quit' or 'exit' to stop, 'help' for commands\n")

    while True:
        try:
            text = input("📝 Enter text to classify: ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\n\n👋 Goodbye!")
            break

        if text.lower() in ['quit', 'exit', 'q']:
            print("👋 Goodbye!")
            break

        if text.lower() == 'help':
            print("\nCommands:")
            print("  - Type any text to classify it")
            print("  - 'quit' or 'exit' to stop")
            print("  - 'help' to show this message\n")
            continue

        print_result(predictor.classify(text))
        print()


def batch_process(predictor: SentimentPredictor, input_file: str, output_file: str):
    """Process multiple texts from a file, one per line."""
    with open(input_file, 'r', encoding='utf-8') as f:
        texts = [line.strip() for line in f if line.strip()]

    print(f"📂 Processing {len(texts)} texts from {input_file}...")
    results = [r.to_dict() for r in predictor.predict_batch(texts)]

    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(results, f, indent=2, ensure_ascii=False)

    print(f"✅ Results saved to {output_file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Sentiment Pipeline CLI - train, evaluate and predict',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    subparsers = parser.add_subparsers(dest='command')

    # train
    train_parser = subparsers.add_parser('train', help='Run the training pipeline')
    train_parser.add_argument('--config', type=str, help='JSON configuration file')
    train_parser.add_argument('--data', type=str, dest='data_path',
                              help='Tab-separated dataset (text<TAB>label)')
    train_parser.add_argument('--model-path', type=str,
                              help='Where the model artifact is written / read')
    train_parser.add_argument('--use-trained-model', action='store_true', default=None,
                              help='Load the saved model and only run sample predictions')
    train_parser.add_argument('--test-fraction', type=float,
                              help='Share of records held out for evaluation (default 0.7)')
    train_parser.add_argument('--seed', type=int, dest='split_seed',
                              help='Seed for the train/test split')
    train_parser.add_argument('--trainer', type=str, choices=['sdca', 'lbfgs'],
                              help='Optimizer to train with')
    train_parser.add_argument('--max-iterations', type=int, help='Maximum training epochs')
    train_parser.add_argument('--l2', type=float, dest='l2_regularization',
                              help='L2 regularization strength')
    train_parser.add_argument('--tolerance', type=float, dest='convergence_tolerance',
                              help='Relative duality gap at which training stops')
    train_parser.add_argument('--metrics-path', type=str, help='Write metrics JSON here')
    train_parser.add_argument('--plot-dir', type=str, help='Write figures to this directory')
    train_parser.add_argument('--workers', type=int, dest='num_workers',
                              help='Threads for batch prediction')
    train_parser.add_argument('--quiet', action='store_true', help='Suppress console output')

    # predict
    predict_parser = subparsers.add_parser('predict', help='Classify text with a saved model')
    predict_parser.add_argument('--model-path', type=str, default=DEFAULT_MODEL_PATH,
                                help='Saved model artifact')
    group = predict_parser.add_mutually_exclusive_group(required=True)
    group.add_argument('--text', type=str, help='Single text to classify')
    group.add_argument('--interactive', action='store_true', help='Run in interactive mode')
    group.add_argument('--input-file', type=str,
                       help='File containing texts to classify (one per line)')
    predict_parser.add_argument('--output-file', type=str,
                                help='Output file for batch processing results (JSON format)')
    predict_parser.add_argument('--workers', type=int, dest='num_workers',
                                help='Threads for batch prediction')

    return parser


def run_train(args) -> int:
    pipeline_keys = ['data_path', 'model_path', 'use_trained_model', 'test_fraction',
                     'split_seed', 'metrics_path', 'plot_dir', 'num_workers']
    training_keys = ['trainer', 'max_iterations', 'l2_regularization', 'convergence_tolerance']

    overrides = {k: getattr(args, k) for k in pipeline_keys if getattr(args, k) is not None}
    if args.quiet:
        overrides['verbose'] = False
    training_overrides = {k: getattr(args, k) for k in training_keys
                          if getattr(args, k) is not None}

    config = ConfigLoader(args.config).get_pipeline_config(
        override_params=overrides,
        training_overrides=training_overrides
    )
    run_pipeline(config)
    return 0


def run_predict(args) -> int:
    if args.input_file and not args.output_file:
        print("❌ Error: --output-file is required for batch processing")
        return 1

    print("🔧 Loading model...")
    predictor = SentimentPredictor(
        load_model(args.model_path),
        threshold=INFERENCE_CONFIG['threshold'],
        num_workers=args.num_workers
    )
    print("✅ Model loaded successfully!\n")

    if args.text is not None:
        print_result(predictor.classify(args.text))
    elif args.interactive:
        interactive_mode(predictor)
    else:
        batch_process(predictor, args.input_file, args.output_file)
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command == 'train':
            return run_train(args)
        return run_predict(args)
    except SentimentPipelineError as e:
        print(f"❌ {e.kind}: {e}")
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
