"""Model evaluation."""

from .metrics import NO_PREDICTION, EvaluationResult, evaluate, top_predictions

__all__ = ['NO_PREDICTION', 'EvaluationResult', 'evaluate', 'top_predictions']
