"""Model loading utilities for the serving module."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..errors import ModelLoadError
from ..models.ovr.model import OneVsRestModel
from ..models.ovr.persistence import MODEL_FILENAME, load_model_file
from ..utils import get_logger, json_log

log = get_logger(__name__)

METADATA_FILENAME = 'metadata.json'


@dataclass(frozen=True)
class ModelArtifact:
    """Container for a loaded model and its metadata."""

    model: OneVsRestModel
    metadata: dict[str, Any]
    version: str
    model_name: str
    algorithm: dict[str, Any]


def load_model(model_dir: str | Path) -> ModelArtifact:
    """
    Load a trained model and its metadata from a directory.

    Args:
        model_dir: Path to directory containing ovr_model.joblib and metadata.json.

    Returns:
        ModelArtifact containing the model and its configuration.

    Raises:
        ModelLoadError: If model files are missing or corrupted.
    """
    model_path = Path(model_dir)

    if not model_path.exists():
        raise ModelLoadError(f'Model directory not found: {model_path}')

    joblib_path = model_path / MODEL_FILENAME
    metadata_path = model_path / METADATA_FILENAME

    if not joblib_path.exists():
        raise ModelLoadError(f'Model file not found: {joblib_path}')

    if not metadata_path.exists():
        raise ModelLoadError(f'Metadata file not found: {metadata_path}')

    model = load_model_file(joblib_path)

    try:
        metadata = json.loads(metadata_path.read_text(encoding='utf-8'))
    except (json.JSONDecodeError, OSError) as exc:
        raise ModelLoadError(f'Failed to load metadata: {exc}') from exc
    if not isinstance(metadata, dict):
        raise ModelLoadError('Failed to load metadata: expected a JSON object')

    version = metadata.get('version', 'unknown')

    log.info(
        json_log(
            'model.loaded',
            component='serving.loader',
            model_dir=str(model_path),
            version=version,
            n_classes=len(model.class_label_map),
        )
    )

    return ModelArtifact(
        model=model,
        metadata=metadata,
        version=version,
        model_name=metadata.get('model_name', 'unknown'),
        algorithm=metadata.get('algorithm', {}),
    )
