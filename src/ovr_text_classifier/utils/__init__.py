"""Shared utilities."""

from .logging import get_logger, json_log, set_level

__all__ = ['get_logger', 'json_log', 'set_level']
