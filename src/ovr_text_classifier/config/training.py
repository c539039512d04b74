"""Config models and loaders for training."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..errors import ConfigError
from ..models.ovr.model import LRAlgorithmParams


@dataclass(frozen=True)
class DataConfig:
    train_path: Path
    test_path: Path | None = None
    text_column: str = 'text'
    category_column: str = 'category'
    label_mapping: dict[str, float] | None = None


@dataclass(frozen=True)
class VectorizerConfig:
    lowercase: bool = True
    ngram_range: tuple[int, int] = (1, 1)
    min_df: int | float = 1
    max_df: int | float = 1.0
    sublinear_tf: bool = True
    stop_words: str | list[str] | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            'lowercase': self.lowercase,
            'ngram_range': list(self.ngram_range),
            'min_df': self.min_df,
            'max_df': self.max_df,
            'sublinear_tf': self.sublinear_tf,
            'stop_words': self.stop_words,
        }


@dataclass(frozen=True)
class ExecutionConfig:
    n_jobs: int = 1
    backend: str | None = None
    strict_convergence: bool = False


@dataclass(frozen=True)
class TrainingConfig:
    data: DataConfig
    output_dir: Path
    model_name: str = 'ovr_text_classifier'
    vectorizer: VectorizerConfig = field(default_factory=VectorizerConfig)
    algorithm: LRAlgorithmParams = field(default_factory=LRAlgorithmParams)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)


def load_training_config(config_path: str | Path) -> TrainingConfig:
    """Load a training config YAML file."""
    cfg_path = Path(config_path).expanduser().resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f'Config file not found: {cfg_path}')

    with cfg_path.open('r', encoding='utf-8') as fh:
        data = yaml.safe_load(fh) or {}

    base_dir = cfg_path.parent

    model_section = data.get('model') or {}
    data_section = data.get('data') or {}
    splits = data_section.get('splits') or {}
    vectorizer_section = data.get('vectorizer') or {}
    algorithm_section = data.get('algorithm') or {}
    execution_section = data.get('training') or {}
    artifacts_section = data.get('artifacts') or {}

    train_path = splits.get('train')
    if not train_path:
        raise ConfigError('data.splits.train must be set in training config')
    output_dir = artifacts_section.get('output_dir')
    if not output_dir:
        raise ConfigError('artifacts.output_dir must be set in training config')

    label_mapping = data_section.get('label_mapping')
    if label_mapping is not None and not isinstance(label_mapping, dict):
        raise ConfigError('data.label_mapping must be a mapping of category to label')

    data_cfg = DataConfig(
        train_path=_resolve_path(base_dir, train_path),
        test_path=_resolve_optional_path(base_dir, splits.get('test')),
        text_column=data_section.get('text_column', 'text'),
        category_column=data_section.get('category_column', 'category'),
        label_mapping=label_mapping,
    )

    ngram_range = vectorizer_section.get('ngram_range', [1, 1])
    if len(ngram_range) != 2:
        raise ConfigError(f'vectorizer.ngram_range must have two values, got {ngram_range}')
    vectorizer = VectorizerConfig(
        lowercase=bool(vectorizer_section.get('lowercase', True)),
        ngram_range=(int(ngram_range[0]), int(ngram_range[1])),
        min_df=vectorizer_section.get('min_df', 1),
        max_df=vectorizer_section.get('max_df', 1.0),
        sublinear_tf=bool(vectorizer_section.get('sublinear_tf', True)),
        stop_words=vectorizer_section.get('stop_words'),
    )

    try:
        algorithm = LRAlgorithmParams(
            reg_param=float(algorithm_section.get('reg_param', 0.0)),
            max_iterations=int(algorithm_section.get('max_iterations', 100)),
            threshold=float(algorithm_section.get('threshold', 0.5)),
        )
        n_jobs = int(execution_section.get('n_jobs', 1))
    except ConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigError(f'Invalid numeric value in training config: {exc}') from exc

    execution = ExecutionConfig(
        n_jobs=n_jobs,
        backend=execution_section.get('backend'),
        strict_convergence=bool(execution_section.get('strict_convergence', False)),
    )

    return TrainingConfig(
        data=data_cfg,
        output_dir=_resolve_path(base_dir, output_dir),
        model_name=model_section.get('name', 'ovr_text_classifier'),
        vectorizer=vectorizer,
        algorithm=algorithm,
        execution=execution,
    )


def _resolve_path(base: Path, value: str | Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _resolve_optional_path(base: Path, value: str | Path | None) -> Path | None:
    if value is None:
        return None
    return _resolve_path(base, value)
