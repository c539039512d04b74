"""Configuration utilities for ovr_text_classifier."""

from .serving import (
    BatchConfig,
    LoggingConfig,
    ModelConfig,
    ServerConfig,
    ServingConfig,
    ValidationConfig,
    load_serving_config,
)
from .training import (
    DataConfig,
    ExecutionConfig,
    TrainingConfig,
    VectorizerConfig,
    load_training_config,
)

__all__ = [
    'BatchConfig',
    'LoggingConfig',
    'ModelConfig',
    'ServerConfig',
    'ServingConfig',
    'ValidationConfig',
    'load_serving_config',
    'DataConfig',
    'ExecutionConfig',
    'TrainingConfig',
    'VectorizerConfig',
    'load_training_config',
]
