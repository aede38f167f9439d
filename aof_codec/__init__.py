"""
aof-codec - Binary codec for AOF game-replay files.

This package provides:
- core: Replay model, validation and error codes
- formats: Wire primitives and the revision table
- codec: Encoder (current revision) and decoder (revisions 8-12)
- storage: Save/load replay files
- config: YAML configuration with environment variable support
- cli: Command-line interface
"""

__version__ = "1.0.0"

from .core import (
    Player,
    Fragment,
    Keyframe,
    Chunk,
    FragmentMap,
    ReplayMetadata,
    ReplayData,
    ReplayRecord,
    ValidationReport,
    validate,
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
)
from .formats import CURRENT_REVISION, RevisionPolicy, policy_for, is_rejected
from .codec import ReplayEncoder, ReplayDecoder, EncodeResult, encode, decode
from .storage import SaveResult, save, load
from .config import AofConfig, load_config

__all__ = [
    # Version
    '__version__',
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
    # Errors
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
    # Formats
    'CURRENT_REVISION',
    'RevisionPolicy',
    'policy_for',
    'is_rejected',
    # Codec
    'ReplayEncoder',
    'ReplayDecoder',
    'EncodeResult',
    'encode',
    'decode',
    # Storage
    'SaveResult',
    'save',
    'load',
    # Config
    'AofConfig',
    'load_config',
]
