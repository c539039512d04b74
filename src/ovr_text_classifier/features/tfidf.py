"""TF-IDF feature transform for raw text."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer

from ..utils.logging import get_logger, json_log

log = get_logger(__name__)


class TfidfFeatureTransform:
    """Maps text to a dense, fixed-length TF-IDF vector."""

    def __init__(
        self,
        lowercase: bool = True,
        ngram_range: tuple[int, int] = (1, 1),
        min_df: int | float = 1,
        max_df: int | float = 1.0,
        sublinear_tf: bool = True,
        stop_words: str | list[str] | None = None,
    ) -> None:
        self.vectorizer = TfidfVectorizer(
            lowercase=lowercase,
            ngram_range=tuple(ngram_range),
            min_df=min_df,
            max_df=max_df,
            sublinear_tf=sublinear_tf,
            stop_words=stop_words,
        )
        self._fitted = False

    @classmethod
    def from_config(cls, vectorizer_cfg: dict[str, Any]) -> TfidfFeatureTransform:
        return cls(
            lowercase=vectorizer_cfg.get('lowercase', True),
            ngram_range=tuple(vectorizer_cfg.get('ngram_range', (1, 1))),
            min_df=vectorizer_cfg.get('min_df', 1),
            max_df=vectorizer_cfg.get('max_df', 1.0),
            sublinear_tf=vectorizer_cfg.get('sublinear_tf', True),
            stop_words=vectorizer_cfg.get('stop_words'),
        )

    def fit(self, texts: Iterable[str]) -> TfidfFeatureTransform:
        self.vectorizer.fit(list(texts))
        self._fitted = True
        log.info(
            json_log(
                'features.tfidf.fitted',
                component='features.tfidf',
                vocabulary_size=self.dimension,
            )
        )
        return self

    def fit_transform(self, texts: Iterable[str]) -> np.ndarray:
        texts = list(texts)
        return self.fit(texts).transform_many(texts)

    @property
    def dimension(self) -> int:
        self._check_fitted()
        return len(self.vectorizer.vocabulary_)

    def transform(self, text: str) -> np.ndarray:
        """Return the TF-IDF vector of a single text."""
        return self.transform_many([text])[0]

    def transform_many(self, texts: Iterable[str]) -> np.ndarray:
        """Return a dense ``(n_texts, dimension)`` matrix."""
        self._check_fitted()
        matrix = self.vectorizer.transform(list(texts))
        return np.asarray(matrix.toarray(), dtype=np.float64)

    def _check_fitted(self) -> None:
        if not self._fitted:
            raise RuntimeError('TfidfFeatureTransform must be fitted before use')
