"""Dataset splitting utilities."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from sklearn.model_selection import train_test_split

from ..utils.logging import get_logger, json_log

log = get_logger(__name__)


def split_dataset(
    input_csv: str | Path,
    output_dir: str | Path,
    stratify_column: str = 'category',
    test_ratio: float = 0.2,
    random_state: int = 42,
) -> tuple[Path, Path]:
    """Split a labeled CSV into stratified train/test files."""
    if not 0.0 < test_ratio < 1.0:
        raise ValueError('test_ratio must be between 0 and 1')

    input_path = Path(input_csv)
    output_base = Path(output_dir)
    output_base.mkdir(parents=True, exist_ok=True)

    df = pd.read_csv(input_path)
    if stratify_column not in df.columns:
        raise ValueError(f"Column '{stratify_column}' not found for stratified split")

    train_df, test_df = train_test_split(
        df,
        test_size=test_ratio,
        stratify=df[stratify_column],
        random_state=random_state,
    )

    train_path = output_base / 'train' / 'train.csv'
    test_path = output_base / 'test' / 'test.csv'
    for path in (train_path, test_path):
        path.parent.mkdir(parents=True, exist_ok=True)

    train_df.to_csv(train_path, index=False)
    test_df.to_csv(test_path, index=False)

    log.info(
        json_log(
            'split.completed',
            component='data.split',
            input=str(input_path),
            output_dir=str(output_base),
            stratify=stratify_column,
            rows=int(len(df)),
            train_rows=int(len(train_df)),
            test_rows=int(len(test_df)),
        )
    )
    return train_path, test_path
