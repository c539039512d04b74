"""Binary logistic regression fitting over an external solver."""

from __future__ import annotations

import math
import warnings

import numpy as np
from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import LogisticRegression

from ...common.protocols import BinarySolver, SolverResult
from ...errors import FitError
from ...utils.logging import get_logger, json_log
from .model import ClassEstimate, LRAlgorithmParams

log = get_logger(__name__)


class SklearnLogisticSolver:
    """
    Binary solver backed by scikit-learn's ``LogisticRegression``.

    ``reg_param`` is the L2 strength of the mean log-loss objective
    ``loss / n + reg_param / 2 * ||w||^2``, so it maps to
    ``C = 1 / (n * reg_param)``. ``reg_param == 0`` fits without penalty.
    The intercept is never penalized.
    """

    def __init__(self, solver: str = 'lbfgs', tol: float = 1e-6) -> None:
        self.solver = solver
        self.tol = tol

    def solve(
        self,
        features: np.ndarray,
        labels: np.ndarray,
        *,
        reg_param: float,
        max_iterations: int,
        threshold: float,  # noqa: ARG002
    ) -> SolverResult:
        n_rows, n_features = features.shape
        distinct = np.unique(labels)
        if distinct.size == 1:
            # sklearn rejects single-class input; this is the limit a one-class fit converges to.
            intercept = math.inf if distinct[0] == 1.0 else -math.inf
            return SolverResult(
                coefficients=np.zeros(n_features, dtype=np.float64),
                intercept=intercept,
                converged=True,
                n_iter=0,
            )

        C = math.inf if reg_param == 0 else 1.0 / (n_rows * reg_param)
        clf = LogisticRegression(C=C, solver=self.solver, max_iter=max_iterations, tol=self.tol)
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', ConvergenceWarning)
            clf.fit(features, labels)

        # warning filters are process-global, so read convergence off the fitted model
        n_iter = int(np.max(clf.n_iter_))
        # classes_ is sorted, so coef_ refers to label 1.0 (pivot is 0.0)
        return SolverResult(
            coefficients=np.asarray(clf.coef_[0], dtype=np.float64),
            intercept=float(clf.intercept_[0]),
            converged=n_iter < max_iterations,
            n_iter=n_iter,
        )


class ClassifierFitter:
    """Fits one binary classifier and returns its ``ClassEstimate``."""

    def __init__(
        self,
        solver: BinarySolver | None = None,
        strict_convergence: bool = False,
    ) -> None:
        self.solver = solver if solver is not None else SklearnLogisticSolver()
        self.strict_convergence = strict_convergence

    def fit(
        self,
        binary_labels: np.ndarray,
        features: np.ndarray,
        params: LRAlgorithmParams,
        label: float | None = None,
    ) -> ClassEstimate:
        """
        Fit a binary logistic model for one class.

        Args:
            binary_labels: 0/1 label column, one entry per feature row.
            features: Feature matrix of shape ``(n_rows, n_features)``.
            params: Shared hyperparameters.
            label: Class label being fitted, used in errors and logs.

        Returns:
            ClassEstimate with the solver's coefficients and intercept.

        Raises:
            FitError: If there are no rows, the solver raises, or the solver
                does not converge while ``strict_convergence`` is enabled.
        """
        features = np.asarray(features, dtype=np.float64)
        binary_labels = np.asarray(binary_labels, dtype=np.float64)

        if features.ndim != 2 or features.shape[0] == 0:
            raise FitError(f'cannot fit label {label}: no training rows', label=label)
        if binary_labels.shape[0] != features.shape[0]:
            raise FitError(
                f'cannot fit label {label}: {binary_labels.shape[0]} labels '
                f'for {features.shape[0]} feature rows',
                label=label,
            )

        positives = int(binary_labels.sum())
        if positives in (0, binary_labels.shape[0]):
            log.warning(
                json_log(
                    'fit.degenerate_labels',
                    component='models.ovr.fitter',
                    label=label,
                    positives=positives,
                    rows=int(binary_labels.shape[0]),
                )
            )

        try:
            result = self.solver.solve(
                features,
                binary_labels,
                reg_param=params.reg_param,
                max_iterations=params.max_iterations,
                threshold=params.threshold,
            )
        except Exception as exc:
            raise FitError(f'solver failed for label {label}: {exc}', label=label) from exc

        if not result.converged:
            if self.strict_convergence:
                raise FitError(
                    f'solver did not converge for label {label} '
                    f'within {params.max_iterations} iterations',
                    label=label,
                )
            log.warning(
                json_log(
                    'fit.not_converged',
                    component='models.ovr.fitter',
                    label=label,
                    n_iter=result.n_iter,
                    max_iterations=params.max_iterations,
                )
            )

        coefficients = np.asarray(result.coefficients, dtype=np.float64).ravel()
        if coefficients.shape[0] != features.shape[1]:
            raise FitError(
                f'solver returned {coefficients.shape[0]} coefficients '
                f'for {features.shape[1]} features (label {label})',
                label=label,
            )
        return ClassEstimate(coefficients=coefficients, intercept=result.intercept)
