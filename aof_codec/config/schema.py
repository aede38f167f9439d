"""
Configuration schema for the AOF codec tools.

Supports:
- YAML file loading
- Environment variable substitution (${VAR_NAME})
- Validation with error messages
- Redaction of host-specific paths for safe sharing

Example config (aof.yml):
    version: 1

    storage:
      directory: ${AOF_REPLAY_DIR}
      extension: .aof

    logging:
      level: INFO
      rich: true
"""

import logging
import os
import re
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Any

import yaml

from ..core.errors import ConfigError


LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _substitute_env_vars(value: Any) -> Any:
    """
    Substitute ${VAR_NAME} with environment variable values.

    Example:
        ${AOF_REPLAY_DIR} → os.environ.get('AOF_REPLAY_DIR')
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}]+)\}'

        def replace(match):
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                return match.group(0)  # Keep original if not found
            return env_value

        return re.sub(pattern, replace, value)

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]

    return value


@dataclass
class StorageConfig:
    """Where replay files are written."""
    directory: str = '.'
    extension: str = '.aof'

    @property
    def path(self) -> Path:
        return Path(self.directory).expanduser()

    def target(self, filename: str) -> Path:
        """Resolve a save target: directory / (filename + extension)."""
        name = Path(str(filename) + self.extension)
        if name.is_absolute():
            return name
        return self.path / name


@dataclass
class LoggingConfig:
    """Logging settings for the command-line tools."""
    level: str = 'WARNING'
    rich: bool = True

    @property
    def level_value(self) -> int:
        return getattr(logging, self.level.upper(), logging.WARNING)


@dataclass
class AofConfig:
    """Root configuration."""

    version: int = 1
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path) -> 'AofConfig':
        """Load from YAML file with env var substitution."""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        data = _substitute_env_vars(data)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'AofConfig':
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        sections = {}
        for name in ('storage', 'logging'):
            section = data.get(name) or {}
            if not isinstance(section, dict):
                raise ConfigError(f"Section '{name}' must be a mapping, got {type(section).__name__}")
            sections[name] = section

        for name, key in (('storage', 'directory'), ('storage', 'extension'), ('logging', 'level')):
            value = sections[name].get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"{name}.{key} must be a string, got {value!r}")

        try:
            return cls(
                version=data.get('version', 1),
                storage=StorageConfig(**sections['storage']),
                logging=LoggingConfig(**sections['logging']),
            )
        except TypeError as e:
            raise ConfigError(f"Unknown configuration key ({e})") from e

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Convert to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate config. Returns list of errors (empty if valid)."""
        errors = []

        if self.version != 1:
            errors.append(f"Unsupported config version: {self.version}")

        if not self.storage.extension.startswith('.'):
            errors.append(f"Extension must start with '.': {self.storage.extension!r}")

        if '${' in self.storage.directory:
            errors.append(f"Unresolved variable in storage.directory: {self.storage.directory}")

        if self.logging.level.upper() not in LOG_LEVELS:
            errors.append(f"Invalid logging level: {self.logging.level}")

        return errors

    def redacted(self) -> 'AofConfig':
        """Return copy with the storage directory replaced by its name only."""
        import copy
        redacted = copy.deepcopy(self)
        if redacted.storage.directory not in ('', '.'):
            redacted.storage.directory = '***REDACTED***/' + Path(redacted.storage.directory).name
        return redacted


def load_config(path: Optional[Path] = None) -> AofConfig:
    """Load config from file or return defaults."""
    if path and Path(path).exists():
        return AofConfig.load(path)

    search_paths = [
        Path('./aof.yml'),
        Path('./aof.yaml'),
        Path.home() / '.aof' / 'config.yml',
    ]

    for p in search_paths:
        if p.exists():
            return AofConfig.load(p)

    return AofConfig()


def generate_default_config() -> str:
    """Generate default config as YAML."""
    return """# AOF codec configuration
version: 1

storage:
  # directory: ${AOF_REPLAY_DIR}
  directory: .
  extension: .aof

logging:
  level: WARNING
  rich: true
"""
