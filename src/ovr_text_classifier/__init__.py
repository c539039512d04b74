"""One-vs-rest logistic regression text classifier."""

__version__ = '0.1.0'
