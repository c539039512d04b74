"""Protocols for the collaborators plugged into training and scoring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np


class FeatureTransform(Protocol):
    """Maps raw text to a fixed-length numeric feature vector.

    Implementations must be deterministic and side-effect free once fitted.
    """

    @property
    def dimension(self) -> int:
        """Length of every vector returned by ``transform``."""
        ...

    def transform(self, text: str) -> np.ndarray:
        """Return a 1-D float64 vector of length ``dimension``."""
        ...


@dataclass(frozen=True)
class SolverResult:
    """Raw output of a binary logistic regression solver."""

    coefficients: np.ndarray
    intercept: float
    converged: bool
    n_iter: int


class BinarySolver(Protocol):
    """External binary logistic regression fitting routine.

    The positive class is binary label ``1.0``; ``0.0`` is the pivot.
    """

    def solve(
        self,
        features: np.ndarray,
        labels: np.ndarray,
        *,
        reg_param: float,
        max_iterations: int,
        threshold: float,
    ) -> SolverResult: ...
