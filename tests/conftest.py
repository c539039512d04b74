"""Shared fixtures: a small three-topic corpus and a training config."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

TRAIN_ROWS = [
    ('the striker scored a late goal in the match', 'sports'),
    ('the goalkeeper saved a penalty during the match', 'sports'),
    ('fans cheered as the team won the league match', 'sports'),
    ('the coach praised the striker and the goalkeeper', 'sports'),
    ('simmer the onions and garlic in olive oil', 'cooking'),
    ('bake the bread dough in a hot oven', 'cooking'),
    ('whisk the eggs with sugar and butter', 'cooking'),
    ('season the soup with garlic and fresh herbs', 'cooking'),
    ('the stock market rallied as shares rose', 'finance'),
    ('investors sold bonds after the interest rate hike', 'finance'),
    ('the bank raised its interest rate forecast', 'finance'),
    ('quarterly earnings lifted the shares of the bank', 'finance'),
]

TEST_ROWS = [
    ('the striker missed a penalty in the league match', 'sports'),
    ('simmer garlic and herbs in butter', 'cooking'),
    ('shares fell after the bank earnings', 'finance'),
]


def write_corpus(path: Path, rows: list[tuple[str, str]]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows, columns=['text', 'category']).to_csv(path, index=False)
    return path


@pytest.fixture
def train_csv(tmp_path: Path) -> Path:
    return write_corpus(tmp_path / 'data' / 'train.csv', TRAIN_ROWS)


@pytest.fixture
def test_csv(tmp_path: Path) -> Path:
    return write_corpus(tmp_path / 'data' / 'test.csv', TEST_ROWS)


@pytest.fixture
def training_config(tmp_path: Path, train_csv: Path, test_csv: Path) -> Path:
    """Training config using paths relative to the config file."""
    config_path = tmp_path / 'training.yaml'
    config_path.write_text(
        """
model:
  name: test_ovr

data:
  splits:
    train: data/train.csv
    test: data/test.csv
  text_column: text
  category_column: category

vectorizer:
  lowercase: true
  ngram_range: [1, 1]
  min_df: 1
  sublinear_tf: true

algorithm:
  reg_param: 0.01
  max_iterations: 200
  threshold: 0.5

training:
  n_jobs: 1

artifacts:
  output_dir: artifacts
""",
        encoding='utf-8',
    )
    return config_path


@pytest.fixture
def trained_model():
    """One-vs-rest model trained on the in-memory corpus."""
    from ovr_text_classifier.data.dataset import build_label_map, encode_categories
    from ovr_text_classifier.features.tfidf import TfidfFeatureTransform
    from ovr_text_classifier.models.ovr.model import LRAlgorithmParams
    from ovr_text_classifier.models.ovr.trainer import train

    texts = [text for text, _ in TRAIN_ROWS]
    categories = [category for _, category in TRAIN_ROWS]
    label_map = build_label_map(categories)
    transform = TfidfFeatureTransform()
    features = transform.fit_transform(texts)
    return train(
        label_map=label_map,
        labels=encode_categories(categories, label_map),
        features=features,
        params=LRAlgorithmParams(reg_param=0.01, max_iterations=200, threshold=0.5),
        feature_transform=transform,
    )
