"""Data structures for the one-vs-rest logistic regression model."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

import numpy as np

from ...common.protocols import FeatureTransform
from ...errors import ConfigError


@dataclass(frozen=True)
class LRAlgorithmParams:
    """Hyperparameters shared by every per-class binary fit.

    ``threshold`` is kept for parity with the solver interface. It never
    changes the fitted coefficients or the returned probabilities.
    """

    reg_param: float = 0.0
    max_iterations: int = 100
    threshold: float = 0.5

    def __post_init__(self) -> None:
        for name in ('reg_param', 'max_iterations', 'threshold'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigError(f'{name} must be a number, got {value!r}')
        if not math.isfinite(self.reg_param) or self.reg_param < 0:
            raise ConfigError(f'reg_param must be a finite value >= 0, got {self.reg_param}')
        iterations = self.max_iterations
        if not math.isfinite(iterations) or int(iterations) != iterations:
            raise ConfigError(f'max_iterations must be an integer, got {self.max_iterations!r}')
        if self.max_iterations < 1:
            raise ConfigError(f'max_iterations must be > 0, got {self.max_iterations}')
        object.__setattr__(self, 'max_iterations', int(self.max_iterations))
        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigError(f'threshold must be within [0, 1], got {self.threshold}')


@dataclass(frozen=True)
class ClassEstimate:
    """Fitted coefficients and intercept of one binary classifier."""

    coefficients: np.ndarray
    intercept: float

    def __post_init__(self) -> None:
        coefficients = np.asarray(self.coefficients, dtype=np.float64).ravel()
        coefficients.setflags(write=False)
        object.__setattr__(self, 'coefficients', coefficients)
        object.__setattr__(self, 'intercept', float(self.intercept))

    @property
    def dimension(self) -> int:
        return int(self.coefficients.shape[0])


@dataclass(frozen=True)
class OneVsRestModel:
    """One binary logistic model per class plus the transform that feeds them.

    Per-class probabilities are computed independently and are not
    normalized: they need not sum to 1.
    """

    feature_transform: FeatureTransform
    class_label_map: dict[float, str]
    class_estimates: dict[float, ClassEstimate]

    def __post_init__(self) -> None:
        if set(self.class_estimates) != set(self.class_label_map):
            missing = sorted(set(self.class_label_map) - set(self.class_estimates))
            extra = sorted(set(self.class_estimates) - set(self.class_label_map))
            raise ValueError(
                f'class estimates do not match the label map (missing={missing}, extra={extra})'
            )
        dimensions = {estimate.dimension for estimate in self.class_estimates.values()}
        if len(dimensions) > 1:
            raise ValueError(f'class estimates have mixed dimensions: {sorted(dimensions)}')

    @property
    def labels(self) -> list[float]:
        return list(self.class_estimates)

    @property
    def dimension(self) -> int | None:
        for estimate in self.class_estimates.values():
            return estimate.dimension
        return None

    def coefficient_matrix(self) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(weights, intercepts)`` stacked in label order."""
        estimates = list(self.class_estimates.values())
        if not estimates:
            return np.empty((0, 0)), np.empty(0)
        weights = np.vstack([estimate.coefficients for estimate in estimates])
        intercepts = np.array([estimate.intercept for estimate in estimates], dtype=np.float64)
        return weights, intercepts

    def __str__(self) -> str:
        return f'OneVsRestModel(classes={len(self.class_label_map)}, dimension={self.dimension})'


@dataclass(frozen=True)
class PredictionResult:
    """Probability that a text belongs to one class."""

    class_name: str
    probability: float
