from __future__ import annotations

import json
import platform
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ...config.training import TrainingConfig, load_training_config
from ...data.dataset import label_map_from_mapping, load_labeled_csv
from ...evaluation.metrics import evaluate
from ...features.tfidf import TfidfFeatureTransform
from ...utils.logging import get_logger, json_log
from .fitter import ClassifierFitter
from .persistence import MODEL_FILENAME, save_model
from .trainer import train

log = get_logger(__name__)

METADATA_FILENAME = 'metadata.json'
METRICS_FILENAME = 'metrics_test.json'


def _next_run_id(base_dir: Path) -> tuple[str, str]:
    today = datetime.now(UTC).strftime('%Y-%m-%d')
    prefix = f'model.{today}_'
    indices = [
        int(p.name[len(prefix):])
        for p in base_dir.iterdir()
        if p.is_dir() and p.name.startswith(prefix) and p.name[len(prefix):].isdigit()
    ]
    last_idx = max(indices, default=0)
    version = f'{today}_{last_idx + 1:03d}'
    return f'model.{version}', version


def train_with_config(cfg: TrainingConfig) -> dict[str, Any]:
    """Train, evaluate and persist a model described by ``cfg``."""
    label_map = (
        label_map_from_mapping(cfg.data.label_mapping)
        if cfg.data.label_mapping is not None
        else None
    )
    train_set = load_labeled_csv(
        cfg.data.train_path,
        text_column=cfg.data.text_column,
        category_column=cfg.data.category_column,
        label_map=label_map,
    )

    transform = TfidfFeatureTransform.from_config(cfg.vectorizer.as_dict())
    features = transform.fit_transform(train_set.texts)

    model = train(
        label_map=train_set.label_map,
        labels=train_set.labels,
        features=features,
        params=cfg.algorithm,
        feature_transform=transform,
        fitter=ClassifierFitter(strict_convergence=cfg.execution.strict_convergence),
        n_jobs=cfg.execution.n_jobs,
        backend=cfg.execution.backend,
    )

    test_metrics: dict[str, Any] | None = None
    if cfg.data.test_path is not None:
        test_set = load_labeled_csv(
            cfg.data.test_path,
            text_column=cfg.data.text_column,
            category_column=cfg.data.category_column,
            label_map=train_set.label_map,
        )
        categories = [train_set.label_map[label] for label in test_set.labels]
        test_metrics = evaluate(model, test_set.texts, categories).as_dict()
        log.info(
            json_log(
                'train.evaluated',
                component='training',
                accuracy=test_metrics['accuracy'],
                n_samples=test_metrics['n_samples'],
            )
        )

    base_dir = cfg.output_dir
    base_dir.mkdir(parents=True, exist_ok=True)
    run_id, version = _next_run_id(base_dir)
    out_dir = base_dir / run_id
    out_dir.mkdir(parents=True, exist_ok=False)
    model_path = save_model(model, out_dir / MODEL_FILENAME)

    metadata = {
        'model_name': cfg.model_name,
        'version': version,
        'python_version': platform.python_version(),
        'algorithm': {
            'reg_param': cfg.algorithm.reg_param,
            'max_iterations': cfg.algorithm.max_iterations,
            'threshold': cfg.algorithm.threshold,
        },
        'vectorizer': cfg.vectorizer.as_dict(),
        'feature_dimension': transform.dimension,
        'label_mapping': {name: label for label, name in model.class_label_map.items()},
        'artifacts': {
            'format': 'joblib',
            'path': str(model_path),
            'run_id': run_id,
        },
    }
    (out_dir / METADATA_FILENAME).write_text(json.dumps(metadata, indent=2), encoding='utf-8')
    if test_metrics is not None:
        (out_dir / METRICS_FILENAME).write_text(
            json.dumps(test_metrics, indent=2), encoding='utf-8'
        )

    return {'report': test_metrics, 'artifact_dir': str(out_dir), 'model': model}


def train_from_config(config_path: str | Path) -> dict[str, Any]:
    """Train model from YAML configuration file."""
    cfg = load_training_config(config_path)
    log.info(json_log('train.config', component='training', config=str(config_path)))
    return train_with_config(cfg)
