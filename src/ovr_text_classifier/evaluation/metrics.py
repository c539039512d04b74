"""
Evaluation of a trained one-vs-rest model on labeled texts.

A prediction is correct when the top-ranked class equals the actual
category. Texts whose result list is empty (no class above the minimum
probability) count as misses and are reported separately.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from sklearn.metrics import accuracy_score, classification_report

from ..models.ovr.model import OneVsRestModel
from ..models.ovr.scorer import predict_batch

NO_PREDICTION = '<none>'


@dataclass
class EvaluationResult:
    """Top-1 metrics over an evaluation set."""

    accuracy: float
    n_samples: int
    n_unpredicted: int
    classification_report: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            'accuracy': self.accuracy,
            'n_samples': self.n_samples,
            'n_unpredicted': self.n_unpredicted,
            'classification_report': self.classification_report,
        }


def top_predictions(model: OneVsRestModel, texts: Sequence[str]) -> list[str]:
    """Return the top-ranked class name per text, or ``NO_PREDICTION``."""
    return [
        results[0].class_name if results else NO_PREDICTION
        for results in predict_batch(model, texts)
    ]


def evaluate(
    model: OneVsRestModel,
    texts: Sequence[str],
    categories: Sequence[str],
) -> EvaluationResult:
    """Compute top-1 accuracy and a per-class report."""
    if len(texts) != len(categories):
        raise ValueError(f'{len(texts)} texts but {len(categories)} categories')
    if not texts:
        raise ValueError('cannot evaluate on an empty dataset')

    y_true = [str(category) for category in categories]
    y_pred = top_predictions(model, texts)
    class_names = list(model.class_label_map.values())

    report = classification_report(
        y_true,
        y_pred,
        labels=class_names,
        output_dict=True,
        zero_division=0,
    )
    return EvaluationResult(
        accuracy=float(accuracy_score(y_true, y_pred)),
        n_samples=len(y_true),
        n_unpredicted=sum(1 for pred in y_pred if pred == NO_PREDICTION),
        classification_report=report,
    )
