"""Ranked class probabilities from a one-vs-rest model."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from scipy.special import expit

from ...errors import PredictError
from .model import OneVsRestModel, PredictionResult

MIN_PROBABILITY = 0.001


def class_probabilities(model: OneVsRestModel, x: Sequence[float] | np.ndarray) -> np.ndarray:
    """
    Return the positive-class probability of every class, in label order.

    Uses ``p = 1 / (1 + exp(-(w.x + b)))``, which equals ``exp(z) / (1 + exp(z))``
    without overflowing for large ``z``. Values are independent per class and
    are not normalized across classes.

    Raises:
        PredictError: If ``x`` is not a 1-D vector of the model dimension.
    """
    vector = np.asarray(x, dtype=np.float64)
    weights, intercepts = model.coefficient_matrix()
    if weights.shape[0] == 0:
        return np.empty(0, dtype=np.float64)
    if vector.ndim != 1 or vector.shape[0] != weights.shape[1]:
        raise PredictError(
            f'feature vector has shape {vector.shape}, model expects ({weights.shape[1]},)'
        )
    with np.errstate(over='ignore', under='ignore'):
        return expit(weights @ vector + intercepts)


def predict_vector(
    model: OneVsRestModel,
    x: Sequence[float] | np.ndarray,
    min_probability: float = MIN_PROBABILITY,
) -> list[PredictionResult]:
    """
    Score a feature vector against every class model.

    Results are sorted by probability, highest first; ties keep label order.
    Only classes with probability strictly above ``min_probability`` are kept.
    """
    probabilities = class_probabilities(model, x)
    labels = model.labels
    order = np.argsort(-probabilities, kind='stable')
    return [
        PredictionResult(
            class_name=model.class_label_map[labels[idx]],
            probability=float(probabilities[idx]),
        )
        for idx in order
        if probabilities[idx] > min_probability
    ]


def predict(model: OneVsRestModel, text: str) -> list[PredictionResult]:
    """Transform ``text`` with the model's feature transform and score it."""
    return predict_vector(model, model.feature_transform.transform(text))


def predict_batch(model: OneVsRestModel, texts: Sequence[str]) -> list[list[PredictionResult]]:
    """Score several texts; one ranked list per input text."""
    return [predict(model, text) for text in texts]
