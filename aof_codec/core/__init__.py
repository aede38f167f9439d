"""Replay model, validation and errors."""

from .errors import (
    ErrorCode,
    ERROR_METADATA,
    AofError,
    ValidationError,
    MissingFieldError,
    NoKeyframesError,
    NoChunksError,
    FieldRangeError,
    FormatError,
    ObsoleteFormatError,
    CorruptFormatError,
    UnsupportedFormatError,
    TruncatedInputError,
    ConfigError,
)
from .replay import (
    Player,
    Fragment,
    Keyframe,
    Chunk,
    FragmentMap,
    ReplayMetadata,
    ReplayData,
    ReplayRecord,
)
from .validator import ValidationReport, validate, NO_PLAYERS_WARNING

__all__ = [
    # Errors
    'ErrorCode',
    'ERROR_METADATA',
    'AofError',
    'ValidationError',
    'MissingFieldError',
    'NoKeyframesError',
    'NoChunksError',
    'FieldRangeError',
    'FormatError',
    'ObsoleteFormatError',
    'CorruptFormatError',
    'UnsupportedFormatError',
    'TruncatedInputError',
    'ConfigError',
    # Model
    'Player',
    'Fragment',
    'Keyframe',
    'Chunk',
    'FragmentMap',
    'ReplayMetadata',
    'ReplayData',
    'ReplayRecord',
    # Validation
    'ValidationReport',
    'validate',
    'NO_PLAYERS_WARNING',
]
