"""Config models and loaders for serving."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from ..errors import ConfigError
from .training import _resolve_path


@dataclass(frozen=True)
class ModelConfig:
    path: Path


@dataclass(frozen=True)
class ServerConfig:
    host: str = '0.0.0.0'  # noqa: S104
    port: int = 8001


@dataclass(frozen=True)
class ValidationConfig:
    max_text_bytes: int = 51200  # 50KB


@dataclass(frozen=True)
class BatchConfig:
    max_items: int = 100


@dataclass(frozen=True)
class LoggingConfig:
    mode: str = 'minimal'  # 'minimal' or 'requests'


@dataclass(frozen=True)
class ServingConfig:
    model: ModelConfig
    server: ServerConfig = field(default_factory=ServerConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_serving_config(config_path: str | Path) -> ServingConfig:
    """Load a serving config YAML file."""
    cfg_path = Path(config_path).expanduser().resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f'Config file not found: {cfg_path}')

    with cfg_path.open('r', encoding='utf-8') as fh:
        data = yaml.safe_load(fh) or {}

    base_dir = cfg_path.parent

    model_section = data.get('model') or {}
    server_section = data.get('server') or {}
    validation_section = data.get('validation') or {}
    batch_section = data.get('batch') or {}
    logging_section = data.get('logging') or {}

    model_path = model_section.get('path')
    if not model_path:
        raise ConfigError('model.path must be set in serving config')

    logging_mode = logging_section.get('mode', 'minimal')
    if logging_mode not in ('minimal', 'requests'):
        raise ConfigError(f"logging.mode must be 'minimal' or 'requests', got {logging_mode!r}")

    return ServingConfig(
        model=ModelConfig(path=_resolve_path(base_dir, model_path)),
        server=ServerConfig(
            host=server_section.get('host', '0.0.0.0'),  # noqa: S104
            port=int(server_section.get('port', 8001)),
        ),
        validation=ValidationConfig(
            max_text_bytes=int(validation_section.get('max_text_bytes', 51200)),
        ),
        batch=BatchConfig(
            max_items=int(batch_section.get('max_items', 100)),
        ),
        logging=LoggingConfig(mode=logging_mode),
    )
