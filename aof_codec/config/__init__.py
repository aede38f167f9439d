"""Configuration management for the AOF codec tools."""

from .schema import (
    AofConfig,
    StorageConfig,
    LoggingConfig,
    load_config,
    generate_default_config,
)

__all__ = [
    'AofConfig',
    'StorageConfig',
    'LoggingConfig',
    'load_config',
    'generate_default_config',
]
