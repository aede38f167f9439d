"""Wire primitives and the revision table."""

from .revisions import (
    CURRENT_REVISION,
    CURRENT_POLICY,
    REVISIONS,
    IdStrategy,
    RevisionPolicy,
    is_rejected,
    policy_for,
)
from .wire import ByteReader, ByteWriter

__all__ = [
    'CURRENT_REVISION',
    'CURRENT_POLICY',
    'REVISIONS',
    'IdStrategy',
    'RevisionPolicy',
    'is_rejected',
    'policy_for',
    'ByteReader',
    'ByteWriter',
]
