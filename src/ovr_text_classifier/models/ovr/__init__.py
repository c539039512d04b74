"""One-vs-rest logistic regression model.

This package contains:
- labels.py: Binary label projection per class
- fitter.py: Binary logistic fit over an external solver
- trainer.py: Parallel per-class training
- scorer.py: Ranked, thresholded class probabilities
- persistence.py: joblib serialization
- training.py: Config-driven training pipeline (import directly)
"""

from .fitter import ClassifierFitter, SklearnLogisticSolver
from .labels import project_binary_labels
from .model import ClassEstimate, LRAlgorithmParams, OneVsRestModel, PredictionResult
from .persistence import load_model_file, save_model
from .scorer import MIN_PROBABILITY, class_probabilities, predict, predict_batch, predict_vector
from .trainer import train

__all__ = [
    'ClassifierFitter',
    'SklearnLogisticSolver',
    'project_binary_labels',
    'ClassEstimate',
    'LRAlgorithmParams',
    'OneVsRestModel',
    'PredictionResult',
    'load_model_file',
    'save_model',
    'MIN_PROBABILITY',
    'class_probabilities',
    'predict',
    'predict_batch',
    'predict_vector',
    'train',
]
