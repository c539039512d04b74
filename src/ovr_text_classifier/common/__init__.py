"""Common interfaces shared across the training and scoring code."""

from .protocols import BinarySolver, FeatureTransform, SolverResult

__all__ = [
    'BinarySolver',
    'FeatureTransform',
    'SolverResult',
]
