"""FastAPI application for serving ranked class predictions."""

from __future__ import annotations

import os
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException

from ..config import ServingConfig, load_serving_config
from ..errors import ModelLoadError, PredictError
from ..models.ovr.scorer import predict_batch
from ..utils import get_logger, json_log
from .loader import ModelArtifact, load_model
from .schemas import (
    ClassProbability,
    ErrorResponse,
    HealthResponse,
    ModelInfoResponse,
    PredictRequest,
    PredictResponse,
    ReadyResponse,
)

# Global state
_artifact: ModelArtifact | None = None
_config: ServingConfig | None = None

log = get_logger(__name__)


def _get_config_path() -> Path:
    """Get the config path from environment or default."""
    return Path(os.getenv('OTC_SERVING_CONFIG', 'configs/serving.yaml'))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load model on startup."""
    global _artifact, _config

    config_path = _get_config_path()
    log.info(
        json_log(
            'serving.startup',
            component='serving.app',
            config_path=str(config_path),
        )
    )

    try:
        _config = load_serving_config(config_path)
        _artifact = load_model(_config.model.path)
        log.info(
            json_log(
                'serving.ready',
                component='serving.app',
                model_version=_artifact.version,
                model_name=_artifact.model_name,
            )
        )
    except (FileNotFoundError, ModelLoadError) as exc:
        log.error(
            json_log(
                'serving.startup_error',
                component='serving.app',
                error=str(exc),
            )
        )
        raise

    yield

    _artifact = None
    log.info(json_log('serving.shutdown', component='serving.app'))


app = FastAPI(
    title='OvR Text Classifier API',
    description='Ranked one-vs-rest class probabilities for raw text.',
    version='0.1.0',
    lifespan=lifespan,
)


def _validate_text_size(text: str, max_bytes: int, context: str = 'text') -> None:
    """Validate text size against limit."""
    text_bytes = len(text.encode('utf-8'))
    if text_bytes > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f'{context} exceeds maximum size of {max_bytes} bytes ({text_bytes} bytes provided)',
        )


def _log_request(endpoint: str, input_length: int, latency_ms: float) -> None:
    """Log request if request logging is enabled."""
    if _config and _config.logging.mode == 'requests':
        log.info(
            json_log(
                'serving.request',
                component='serving.app',
                endpoint=endpoint,
                input_length=input_length,
                latency_ms=round(latency_ms, 2),
            )
        )


@app.get('/health', response_model=HealthResponse, tags=['Health'])
def health() -> HealthResponse:
    """Liveness check endpoint."""
    return HealthResponse(status='ok')


@app.get('/ready', response_model=ReadyResponse, tags=['Health'])
def ready() -> ReadyResponse:
    """Readiness check endpoint."""
    model_loaded = _artifact is not None
    status = 'ready' if model_loaded else 'not_ready'
    return ReadyResponse(status=status, model_loaded=model_loaded)


@app.get('/model/info', response_model=ModelInfoResponse, tags=['Model'])
def model_info() -> ModelInfoResponse:
    """Get information about the loaded model."""
    if _artifact is None:
        raise HTTPException(status_code=503, detail='Model not loaded')

    model = _artifact.model
    return ModelInfoResponse(
        model_name=_artifact.model_name,
        version=_artifact.version,
        classes=list(model.class_label_map.values()),
        feature_dimension=model.dimension,
        algorithm=_artifact.algorithm,
    )


@app.post(
    '/predict',
    response_model=list[PredictResponse],
    responses={
        400: {'model': ErrorResponse},
        422: {'model': ErrorResponse},
        503: {'model': ErrorResponse},
    },
    tags=['Prediction'],
)
def predict(request: PredictRequest) -> list[PredictResponse]:
    """Rank classes for one or more texts."""
    if _artifact is None or _config is None:
        raise HTTPException(status_code=503, detail='Model not loaded')

    start_time = time.perf_counter()

    if len(request.texts) > _config.batch.max_items:
        raise HTTPException(
            status_code=400,
            detail=f'Batch size {len(request.texts)} exceeds maximum of {_config.batch.max_items}',
        )
    for i, text in enumerate(request.texts):
        _validate_text_size(text, _config.validation.max_text_bytes, context=f'Text at index {i}')

    try:
        ranked = predict_batch(_artifact.model, request.texts)
    except PredictError as exc:
        log.error(json_log('serving.predict_error', component='serving.app', error=str(exc)))
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    latency_ms = (time.perf_counter() - start_time) * 1000
    _log_request('/predict', len(request.texts), latency_ms)

    return [
        PredictResponse(
            results=[
                ClassProbability(class_name=item.class_name, probability=item.probability)
                for item in results
            ],
            model_version=_artifact.version,
        )
        for results in ranked
    ]
