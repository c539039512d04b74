"""Labeled text datasets and class label maps."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd

from ..utils.logging import get_logger, json_log

log = get_logger(__name__)


@dataclass(frozen=True)
class LabeledDataset:
    """Texts with their numeric class labels and the label map used."""

    texts: list[str]
    labels: np.ndarray
    label_map: dict[float, str]

    def __len__(self) -> int:
        return len(self.texts)


def build_label_map(categories: Iterable[str]) -> dict[float, str]:
    """Assign ``0.0, 1.0, ...`` to the sorted distinct category names."""
    names = sorted({str(category) for category in categories})
    return {float(idx): name for idx, name in enumerate(names)}


def label_map_from_mapping(mapping: Mapping[str, float | int]) -> dict[float, str]:
    """Invert a ``category -> label`` mapping into a label map."""
    label_map: dict[float, str] = {}
    for name, value in mapping.items():
        label = float(value)
        if label in label_map:
            raise ValueError(
                f"label {label} is assigned to both '{label_map[label]}' and '{name}'"
            )
        label_map[label] = str(name)
    return label_map


def encode_categories(
    categories: Iterable[str],
    label_map: Mapping[float, str],
) -> np.ndarray:
    """Return the numeric label of every category."""
    by_name = {name: label for label, name in label_map.items()}
    encoded = []
    unknown: set[str] = set()
    for category in categories:
        name = str(category)
        if name not in by_name:
            unknown.add(name)
            continue
        encoded.append(by_name[name])
    if unknown:
        raise ValueError(f'categories not present in label map: {sorted(unknown)}')
    return np.asarray(encoded, dtype=np.float64)


def load_labeled_csv(
    csv_path: str | Path,
    text_column: str = 'text',
    category_column: str = 'category',
    label_map: Mapping[float, str] | None = None,
) -> LabeledDataset:
    """
    Load a CSV of texts and category names.

    Args:
        csv_path: CSV file with at least the text and category columns.
        text_column: Column holding raw text.
        category_column: Column holding the class name of each row.
        label_map: Optional fixed label map; built from the data when omitted.

    Returns:
        LabeledDataset with one numeric label per text.
    """
    path = Path(csv_path)
    df = pd.read_csv(path)
    for column in (text_column, category_column):
        if column not in df.columns:
            raise ValueError(f"Column '{column}' not found in {path}")

    df = df.dropna(subset=[text_column, category_column])
    texts = df[text_column].astype(str).tolist()
    categories = df[category_column].astype(str).tolist()

    resolved = dict(label_map) if label_map is not None else build_label_map(categories)
    labels = encode_categories(categories, resolved)

    log.info(
        json_log(
            'data.loaded',
            component='data.dataset',
            path=str(path),
            rows=len(texts),
            n_classes=len(resolved),
        )
    )
    return LabeledDataset(texts=texts, labels=labels, label_map=resolved)
