"""Unit tests for one-vs-rest training."""

from __future__ import annotations

import math

import numpy as np
import pytest

from ovr_text_classifier.common.protocols import SolverResult
from ovr_text_classifier.errors import FitError
from ovr_text_classifier.models.ovr.fitter import ClassifierFitter
from ovr_text_classifier.models.ovr.model import LRAlgorithmParams
from ovr_text_classifier.models.ovr.scorer import predict_vector
from ovr_text_classifier.models.ovr.trainer import train

LABEL_MAP = {0.0: 'ham', 1.0: 'spam', 2.0: 'promo'}
FEATURES = np.array(
    [
        [0.0, 0.1, 0.0],
        [0.1, 0.0, 0.0],
        [1.0, 0.9, 0.0],
        [0.9, 1.0, 0.1],
        [0.0, 0.2, 1.0],
        [0.1, 0.0, 0.9],
    ]
)
LABELS = np.array([0.0, 0.0, 1.0, 1.0, 2.0, 2.0])
PARAMS = LRAlgorithmParams(reg_param=0.1, max_iterations=100, threshold=0.5)


class IdentityTransform:
    dimension = 3

    def transform(self, text):
        return np.asarray([float(v) for v in text.split(',')])


class LabelSumSolver:
    """Deterministic solver: coefficients are the mean positive row."""

    def solve(self, features, labels, *, reg_param, max_iterations, threshold):
        positives = labels.sum()
        coefficients = features.T @ labels / max(positives, 1.0)
        return SolverResult(coefficients, float(positives), True, 1)


class FailOnLastRowLabelSolver(LabelSumSolver):
    def solve(self, features, labels, **kwargs):
        if labels[-1] == 1.0:
            raise RuntimeError('solver exploded')
        return super().solve(features, labels, **kwargs)


def test_every_class_gets_one_estimate():
    model = train(LABEL_MAP, LABELS, FEATURES, PARAMS, IdentityTransform())
    assert list(model.class_estimates) == [0.0, 1.0, 2.0]
    assert set(model.class_estimates) == set(LABEL_MAP)
    assert model.dimension == 3


def test_label_absent_from_rows_still_gets_estimate():
    label_map = {**LABEL_MAP, 3.0: 'unused'}
    model = train(label_map, LABELS, FEATURES, PARAMS, IdentityTransform())

    estimate = model.class_estimates[3.0]
    assert estimate.intercept == -math.inf
    names = [r.class_name for r in predict_vector(model, [1.0, 1.0, 0.0])]
    assert 'unused' not in names


def test_feature_transform_is_passed_through():
    transform = IdentityTransform()
    model = train(LABEL_MAP, LABELS, FEATURES, PARAMS, transform)
    assert model.feature_transform is transform
    assert model.class_label_map == LABEL_MAP


def test_parallel_matches_sequential():
    sequential = train(LABEL_MAP, LABELS, FEATURES, PARAMS, IdentityTransform(), n_jobs=1)
    parallel = train(
        LABEL_MAP,
        LABELS,
        FEATURES,
        PARAMS,
        IdentityTransform(),
        n_jobs=2,
        backend='threading',
    )
    for label in LABEL_MAP:
        np.testing.assert_allclose(
            sequential.class_estimates[label].coefficients,
            parallel.class_estimates[label].coefficients,
            rtol=1e-9,
            atol=1e-12,
        )
        assert sequential.class_estimates[label].intercept == pytest.approx(
            parallel.class_estimates[label].intercept, rel=1e-9
        )


def test_label_order_does_not_change_estimates():
    fitter = ClassifierFitter(LabelSumSolver())
    forward = train(LABEL_MAP, LABELS, FEATURES, PARAMS, IdentityTransform(), fitter=fitter)
    reversed_map = dict(reversed(list(LABEL_MAP.items())))
    backward = train(reversed_map, LABELS, FEATURES, PARAMS, IdentityTransform(), fitter=fitter)

    assert list(backward.class_estimates) == [2.0, 1.0, 0.0]
    for label in LABEL_MAP:
        np.testing.assert_array_equal(
            forward.class_estimates[label].coefficients,
            backward.class_estimates[label].coefficients,
        )


@pytest.mark.parametrize('n_jobs,backend', [(1, None), (2, 'threading')])
def test_single_class_failure_aborts_training(n_jobs, backend):
    fitter = ClassifierFitter(FailOnLastRowLabelSolver())
    with pytest.raises(FitError, match='solver exploded'):
        train(
            LABEL_MAP,
            LABELS,
            FEATURES,
            PARAMS,
            IdentityTransform(),
            fitter=fitter,
            n_jobs=n_jobs,
            backend=backend,
        )


def test_empty_rows_raise_fit_error():
    with pytest.raises(FitError):
        train(LABEL_MAP, np.empty(0), np.empty((0, 3)), PARAMS, IdentityTransform())


def test_label_row_mismatch_raises_fit_error():
    with pytest.raises(FitError):
        train(LABEL_MAP, LABELS[:2], FEATURES, PARAMS, IdentityTransform())


def test_ham_spam_end_to_end():
    label_map = {0.0: 'ham', 1.0: 'spam'}
    features = np.array([[0.0, 0.0], [1.0, 1.0]])
    labels = np.array([0.0, 1.0])
    params = LRAlgorithmParams(reg_param=0.0, max_iterations=50, threshold=0.5)

    model = train(label_map, labels, features, params, IdentityTransform())
    results = predict_vector(model, [1.0, 1.0])

    assert results[0].class_name == 'spam'
    assert results[0].probability > 0.5
    assert all(r.probability > 0.001 for r in results)
    ham = [r for r in results if r.class_name == 'ham']
    if ham:
        assert ham[0].probability < results[0].probability
