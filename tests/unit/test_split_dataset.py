from __future__ import annotations

import pandas as pd
import pytest

from ovr_text_classifier.data.split import split_dataset


def test_split_dataset_stratified(tmp_path):
    input_csv = tmp_path / 'labeled.csv'
    df = pd.DataFrame(
        {
            'text': [f'doc {i}' for i in range(100)],
            'category': ['sports'] * 50 + ['cooking'] * 30 + ['finance'] * 20,
        }
    )
    df.to_csv(input_csv, index=False)

    train_path, test_path = split_dataset(
        input_csv=input_csv,
        output_dir=tmp_path / 'splits',
        stratify_column='category',
        test_ratio=0.2,
        random_state=0,
    )

    train = pd.read_csv(train_path)
    test = pd.read_csv(test_path)

    assert len(train) + len(test) == len(df)
    assert len(test) == 20
    assert set(train['category']) == {'sports', 'cooking', 'finance'}
    assert set(test['category']) == {'sports', 'cooking', 'finance'}


def test_split_dataset_rejects_bad_ratio(tmp_path):
    with pytest.raises(ValueError, match='test_ratio'):
        split_dataset(tmp_path / 'x.csv', tmp_path, test_ratio=1.0)
