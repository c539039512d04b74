"""Data loading and splitting."""

from .dataset import (
    LabeledDataset,
    build_label_map,
    encode_categories,
    label_map_from_mapping,
    load_labeled_csv,
)
from .split import split_dataset

__all__ = [
    'LabeledDataset',
    'build_label_map',
    'encode_categories',
    'label_map_from_mapping',
    'load_labeled_csv',
    'split_dataset',
]
