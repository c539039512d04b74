"""Serving module for ovr_text_classifier."""

from .app import app
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

__all__ = [
    'app',
    'ModelArtifact',
    'load_model',
    'ClassProbability',
    'ErrorResponse',
    'HealthResponse',
    'ModelInfoResponse',
    'PredictRequest',
    'PredictResponse',
    'ReadyResponse',
]
