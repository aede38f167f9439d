"""
Error codes and exceptions for the AOF codec.

Structured error codes for machine-parseable reports.

Format: E{category}{number}
- E1xxx: Format errors (decode-time, the input bytes are unusable)
- E2xxx: Validation errors (encode-time, the caller must fix the record)
- E3xxx: Configuration errors

I/O errors are not wrapped; OSError from the storage layer propagates as-is.
"""

from enum import Enum
from typing import List, Optional


class ErrorCode(Enum):
    """Structured error codes."""

    # E1xxx: Format errors
    E1001_OBSOLETE_FORMAT = "E1001"
    E1002_CORRUPT_FORMAT = "E1002"
    E1003_UNSUPPORTED_FORMAT = "E1003"
    E1004_TRUNCATED_INPUT = "E1004"

    # E2xxx: Validation errors
    E2001_MISSING_FIELD = "E2001"
    E2002_NO_KEYFRAMES = "E2002"
    E2003_NO_CHUNKS = "E2003"
    E2004_FIELD_OUT_OF_RANGE = "E2004"

    # E3xxx: Configuration errors
    E3001_INVALID_CONFIG = "E3001"


# Error code metadata
ERROR_METADATA = {
    ErrorCode.E1001_OBSOLETE_FORMAT: {
        'severity': 'error',
        'message': 'The file is using an old data format',
        'recoverable': False,
    },
    ErrorCode.E1002_CORRUPT_FORMAT: {
        'severity': 'error',
        'message': 'The file is using a corrupted data format, please report it to an operator',
        'recoverable': False,
    },
    ErrorCode.E1003_UNSUPPORTED_FORMAT: {
        'severity': 'error',
        'message': 'Unsupported format revision',
        'recoverable': False,
    },
    ErrorCode.E1004_TRUNCATED_INPUT: {
        'severity': 'error',
        'message': 'Input ended before the record was complete',
        'recoverable': False,
    },
    ErrorCode.E2001_MISSING_FIELD: {
        'severity': 'error',
        'message': 'Mandatory field missing',
        'recoverable': False,
    },
    ErrorCode.E2002_NO_KEYFRAMES: {
        'severity': 'error',
        'message': 'No keyframes',
        'recoverable': False,
    },
    ErrorCode.E2003_NO_CHUNKS: {
        'severity': 'error',
        'message': 'No chunks',
        'recoverable': False,
    },
    ErrorCode.E2004_FIELD_OUT_OF_RANGE: {
        'severity': 'error',
        'message': 'Field value does not fit its wire width',
        'recoverable': False,
    },
    ErrorCode.E3001_INVALID_CONFIG: {
        'severity': 'error',
        'message': 'Invalid configuration',
        'recoverable': False,
    },
}


class AofError(Exception):
    """
    Base class for codec errors.

    Every error carries an ErrorCode and an optional context dict.

    Example:
        raise TruncatedInputError(context={'offset': 18, 'needed': 4})
    """

    code: Optional[ErrorCode] = None

    def __init__(self, detail: Optional[str] = None, context: Optional[dict] = None):
        self.detail = detail
        self.context = context
        super().__init__(self.message)

    @property
    def severity(self) -> str:
        return ERROR_METADATA.get(self.code, {}).get('severity', 'error')

    @property
    def message(self) -> str:
        base_msg = self.detail or ERROR_METADATA.get(self.code, {}).get('message', 'Unknown error')
        if self.context:
            return f"{base_msg}: {self.context}"
        return base_msg

    @property
    def recoverable(self) -> bool:
        return ERROR_METADATA.get(self.code, {}).get('recoverable', False)

    def to_dict(self) -> dict:
        return {
            'code': self.code.value if self.code else None,
            'severity': self.severity,
            'message': self.message,
            'recoverable': self.recoverable,
            'context': self.context,
        }


# === Encode-time ===

class ValidationError(AofError, ValueError):
    """A replay record cannot be encoded as given."""

    def __init__(
        self,
        detail: Optional[str] = None,
        context: Optional[dict] = None,
        warnings: Optional[List[str]] = None,
    ):
        self.warnings: List[str] = list(warnings or [])
        super().__init__(detail, context)


class MissingFieldError(ValidationError):
    code = ErrorCode.E2001_MISSING_FIELD

    def __init__(self, fields: List[str], warnings: Optional[List[str]] = None):
        self.fields = list(fields)
        super().__init__(
            f"{', '.join(self.fields)} missing",
            warnings=warnings,
        )

    @property
    def field(self) -> str:
        """First missing field."""
        return self.fields[0]


class NoKeyframesError(ValidationError):
    code = ErrorCode.E2002_NO_KEYFRAMES


class NoChunksError(ValidationError):
    code = ErrorCode.E2003_NO_CHUNKS


class FieldRangeError(ValidationError):
    """A value does not fit the wire width of its field."""

    code = ErrorCode.E2004_FIELD_OUT_OF_RANGE

    def __init__(self, field: str, value, expected: str):
        self.field = field
        self.value = value
        super().__init__(
            f"{field}={value!r} does not fit {expected}",
            context={'field': field},
        )


# === Decode-time ===

class FormatError(AofError, ValueError):
    """The input bytes are not a readable AOF buffer."""


class ObsoleteFormatError(FormatError):
    code = ErrorCode.E1001_OBSOLETE_FORMAT


class CorruptFormatError(FormatError):
    code = ErrorCode.E1002_CORRUPT_FORMAT


class UnsupportedFormatError(FormatError):
    code = ErrorCode.E1003_UNSUPPORTED_FORMAT


class TruncatedInputError(FormatError):
    code = ErrorCode.E1004_TRUNCATED_INPUT


# === Configuration ===

class ConfigError(AofError, ValueError):
    code = ErrorCode.E3001_INVALID_CONFIG
