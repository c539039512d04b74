"""Error taxonomy for training, prediction and model loading."""

from __future__ import annotations


class ConfigError(ValueError):
    """Raised when hyperparameters or configuration values are invalid."""


class FitError(RuntimeError):
    """Raised when a per-class binary fit fails; aborts the whole train call."""

    def __init__(self, message: str, label: float | None = None) -> None:
        super().__init__(message)
        self.label = label


class PredictError(RuntimeError):
    """Raised when a feature vector does not match the model dimension."""


class ModelLoadError(RuntimeError):
    """Raised when model loading fails."""
