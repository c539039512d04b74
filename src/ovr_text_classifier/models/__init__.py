"""Model implementations for ovr_text_classifier.

- ovr: One-vs-rest logistic regression
"""
