"""Serialization of one-vs-rest models with joblib."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import joblib
import numpy as np

from ...errors import ModelLoadError
from ...utils.logging import get_logger, json_log
from .model import ClassEstimate, OneVsRestModel

log = get_logger(__name__)

MODEL_FILENAME = 'ovr_model.joblib'
FORMAT_VERSION = 1


def model_to_payload(model: OneVsRestModel) -> dict[str, Any]:
    """Return a plain-data representation of ``model``."""
    weights, intercepts = model.coefficient_matrix()
    return {
        'format_version': FORMAT_VERSION,
        'labels': model.labels,
        'class_label_map': dict(model.class_label_map),
        'coefficients': weights,
        'intercepts': intercepts,
        'feature_transform': model.feature_transform,
    }


def model_from_payload(payload: dict[str, Any]) -> OneVsRestModel:
    """Rebuild a model from ``model_to_payload`` output."""
    version = payload.get('format_version')
    if version != FORMAT_VERSION:
        raise ModelLoadError(f'Unsupported model format version: {version}')

    try:
        labels = [float(label) for label in payload['labels']]
        weights = np.asarray(payload['coefficients'], dtype=np.float64)
        intercepts = np.asarray(payload['intercepts'], dtype=np.float64)
        label_map = {float(k): str(v) for k, v in payload['class_label_map'].items()}
        transform = payload['feature_transform']
    except (KeyError, TypeError, ValueError) as exc:
        raise ModelLoadError(f'Malformed model payload: {exc}') from exc

    if len(labels) != len(intercepts) or (labels and weights.shape[0] != len(labels)):
        raise ModelLoadError('Malformed model payload: estimate count does not match labels')

    estimates = {
        label: ClassEstimate(coefficients=weights[idx], intercept=intercepts[idx])
        for idx, label in enumerate(labels)
    }
    try:
        return OneVsRestModel(
            feature_transform=transform,
            class_label_map=label_map,
            class_estimates=estimates,
        )
    except ValueError as exc:
        raise ModelLoadError(f'Malformed model payload: {exc}') from exc


def save_model(model: OneVsRestModel, path: str | Path) -> Path:
    """Write ``model`` to ``path`` (a file) and return the path."""
    model_path = Path(path)
    model_path.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(model_to_payload(model), model_path, compress=3)
    log.info(
        json_log(
            'model.saved',
            component='models.ovr.persistence',
            path=str(model_path),
            n_classes=len(model.class_label_map),
        )
    )
    return model_path


def load_model_file(path: str | Path) -> OneVsRestModel:
    """Read a model written by ``save_model``."""
    model_path = Path(path)
    if not model_path.exists():
        raise ModelLoadError(f'Model file not found: {model_path}')
    try:
        payload = joblib.load(model_path)
    except Exception as exc:
        raise ModelLoadError(f'Failed to load model: {exc}') from exc
    if not isinstance(payload, dict):
        raise ModelLoadError(f'Failed to load model: unexpected payload {type(payload).__name__}')
    return model_from_payload(payload)
