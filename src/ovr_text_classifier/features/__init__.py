"""Feature transforms."""

from .tfidf import TfidfFeatureTransform

__all__ = ['TfidfFeatureTransform']
