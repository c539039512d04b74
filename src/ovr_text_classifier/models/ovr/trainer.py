"""One-vs-rest training across every class label."""

from __future__ import annotations

import time
from collections.abc import Mapping, Sequence

import numpy as np
from joblib import Parallel, delayed

from ...common.protocols import FeatureTransform
from ...errors import FitError
from ...utils.logging import get_logger, json_log
from .fitter import ClassifierFitter
from .labels import project_binary_labels
from .model import ClassEstimate, LRAlgorithmParams, OneVsRestModel

log = get_logger(__name__)


def _fit_one(
    fitter: ClassifierFitter,
    label: float,
    labels: np.ndarray,
    features: np.ndarray,
    params: LRAlgorithmParams,
) -> tuple[float, ClassEstimate]:
    binary = project_binary_labels(labels, label)
    return label, fitter.fit(binary, features, params, label=label)


def train(
    label_map: Mapping[float, str],
    labels: Sequence[float] | np.ndarray,
    features: np.ndarray,
    params: LRAlgorithmParams,
    feature_transform: FeatureTransform,
    fitter: ClassifierFitter | None = None,
    n_jobs: int | None = 1,
    backend: str | None = None,
) -> OneVsRestModel:
    """
    Fit one binary logistic classifier per class and assemble the model.

    Each class is fitted independently on the shared rows, so the per-class
    fits are dispatched through ``joblib.Parallel`` and merged once at the
    end. The result does not depend on scheduling order.

    Args:
        label_map: Numeric label to class name, for every class to fit.
        labels: Multiclass label column, one entry per feature row.
        features: Feature matrix of shape ``(n_rows, n_features)``.
        params: Hyperparameters shared by every fit.
        feature_transform: Fitted transform, passed through untouched.
        fitter: Binary fitter; defaults to the scikit-learn backed one.
        n_jobs: Parallel workers (``1`` runs sequentially, ``-1`` uses all cores).
        backend: Optional joblib backend name (e.g. ``'loky'``, ``'threading'``).

    Returns:
        OneVsRestModel with exactly one estimate per key of ``label_map``.

    Raises:
        FitError: If any class fails to fit. No partial model is returned.
    """
    fitter = fitter if fitter is not None else ClassifierFitter()
    label_column = np.asarray(labels, dtype=np.float64)
    feature_matrix = np.asarray(features, dtype=np.float64)

    if feature_matrix.ndim != 2 or feature_matrix.shape[0] == 0:
        raise FitError('cannot train: no training rows')
    if label_column.shape[0] != feature_matrix.shape[0]:
        raise FitError(
            f'cannot train: {label_column.shape[0]} labels for {feature_matrix.shape[0]} rows'
        )

    class_labels = [float(label) for label in label_map]
    log.info(
        json_log(
            'train.start',
            component='models.ovr.trainer',
            n_classes=len(class_labels),
            n_rows=int(feature_matrix.shape[0]),
            n_features=int(feature_matrix.shape[1]),
            reg_param=params.reg_param,
            max_iterations=params.max_iterations,
            n_jobs=n_jobs,
        )
    )
    start = time.perf_counter()

    fitted = Parallel(n_jobs=n_jobs, backend=backend)(
        delayed(_fit_one)(fitter, label, label_column, feature_matrix, params)
        for label in class_labels
    )
    estimates = dict(fitted)

    for label in class_labels:
        log.debug(
            json_log(
                'train.class_fitted',
                component='models.ovr.trainer',
                label=label,
                class_name=label_map[label],
                intercept=estimates[label].intercept,
            )
        )

    model = OneVsRestModel(
        feature_transform=feature_transform,
        class_label_map={float(label): str(name) for label, name in label_map.items()},
        class_estimates={label: estimates[label] for label in class_labels},
    )
    log.info(
        json_log(
            'train.completed',
            component='models.ovr.trainer',
            n_classes=len(class_labels),
            seconds=round(time.perf_counter() - start, 3),
        )
    )
    return model
