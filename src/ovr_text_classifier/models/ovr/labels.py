"""Binary label projection for one-vs-rest training."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def project_binary_labels(labels: Sequence[float] | np.ndarray, target: float) -> np.ndarray:
    """
    Map a multiclass label column to a 0/1 column for ``target``.

    A row maps to ``1.0`` when its label equals ``target`` and ``0.0``
    otherwise. A target that never occurs yields an all-zero column.

    Args:
        labels: Multiclass label column.
        target: Label treated as the positive class.

    Returns:
        Float64 array with the same length as ``labels``.
    """
    column = np.asarray(labels, dtype=np.float64)
    return (column == float(target)).astype(np.float64)
