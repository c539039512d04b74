"""Command-line interface for ovr_text_classifier."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from ..data import split_dataset
from ..utils import get_logger, json_log, set_level

# NOTE: Training, serving and evaluation imports are lazy-loaded inside
# command handlers to keep --help fast.

app = typer.Typer(help='One-vs-rest text classifier CLI', no_args_is_help=True)

log = get_logger(__name__)


@app.callback()
def main(
    debug: Annotated[
        bool,
        typer.Option('--debug', help='Enable DEBUG logging (same as OTC_DEBUG=1).'),
    ] = False,
) -> None:
    """One-vs-rest text classifier."""
    if debug:
        set_level(logging.DEBUG)


@app.command('train')
def train_model(
    config: Annotated[
        Path,
        typer.Option(
            '--config',
            '-c',
            exists=True,
            readable=True,
            help='Path to training config YAML.',
        ),
    ] = Path('configs/ovr/training.yaml'),
) -> None:
    """Train a one-vs-rest model from a config file."""
    from ..models.ovr.training import train_from_config

    log.info(json_log('cli.train.start', component='cli', config=str(config)))
    result = train_from_config(config)
    report = result['report']
    if report is not None:
        typer.echo(f'Test accuracy: {report["accuracy"]:.4f}')
    typer.echo(f'Model trained. Artifacts in {result["artifact_dir"]}')


@app.command('predict')
def predict_text(
    model_dir: Annotated[
        Path,
        typer.Option('--model-dir', '-m', help='Directory with ovr_model.joblib and metadata.json.'),
    ],
    texts: Annotated[
        list[str],
        typer.Option('--text', '-t', help='Text to classify (repeatable).'),
    ],
) -> None:
    """Print ranked class probabilities for each text as JSON lines."""
    from ..models.ovr.scorer import predict_batch
    from ..serving.loader import load_model

    artifact = load_model(model_dir)
    for text, results in zip(texts, predict_batch(artifact.model, texts), strict=True):
        payload = {
            'text': text,
            'results': [
                {'class_name': item.class_name, 'probability': item.probability}
                for item in results
            ],
        }
        typer.echo(json.dumps(payload, ensure_ascii=False))


@app.command('evaluate')
def evaluate_model(
    model_dir: Annotated[
        Path,
        typer.Option('--model-dir', '-m', help='Directory with ovr_model.joblib and metadata.json.'),
    ],
    input_csv: Annotated[
        Path,
        typer.Option('--input', '-i', exists=True, readable=True, help='Labeled CSV to score.'),
    ],
    text_column: Annotated[
        str,
        typer.Option('--text-column', help='Text column (default: text).'),
    ] = 'text',
    category_column: Annotated[
        str,
        typer.Option('--category-column', help='Category column (default: category).'),
    ] = 'category',
    output: Annotated[
        Path | None,
        typer.Option('--output', '-o', help='Optional JSON file for the full report.'),
    ] = None,
) -> None:
    """Evaluate a trained model on a labeled CSV."""
    from ..data.dataset import load_labeled_csv
    from ..evaluation import evaluate
    from ..serving.loader import load_model

    artifact = load_model(model_dir)
    label_map = artifact.model.class_label_map
    dataset = load_labeled_csv(
        input_csv,
        text_column=text_column,
        category_column=category_column,
        label_map=label_map,
    )
    categories = [label_map[label] for label in dataset.labels]
    result = evaluate(artifact.model, dataset.texts, categories)

    log.info(
        json_log(
            'cli.evaluate.completed',
            component='cli',
            accuracy=result.accuracy,
            n_samples=result.n_samples,
        )
    )
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(result.as_dict(), indent=2), encoding='utf-8')
        typer.echo(f'Report written to: {output}')
    typer.echo(f'Accuracy: {result.accuracy:.4f} on {result.n_samples} samples')


@app.command('split')
def split_data(
    input_csv: Annotated[
        Path,
        typer.Option('--input', '-i', exists=True, readable=True, help='Labeled CSV to split.'),
    ],
    output_dir: Annotated[
        Path,
        typer.Option('--output-dir', help='Directory to store splits.'),
    ] = Path('data/splits'),
    column: Annotated[
        str,
        typer.Option('--column', help='Column to stratify on.'),
    ] = 'category',
    test_ratio: Annotated[
        float,
        typer.Option('--test-ratio', help='Test split ratio (default 0.2).'),
    ] = 0.2,
    random_state: Annotated[
        int,
        typer.Option('--random-state', help='Random seed for splitting.'),
    ] = 42,
) -> None:
    """Create stratified train/test splits."""
    split_dataset(
        input_csv=input_csv,
        output_dir=output_dir,
        stratify_column=column,
        test_ratio=test_ratio,
        random_state=random_state,
    )
    typer.echo(f'Splits written to: {output_dir}')


if __name__ == '__main__':
    app()
