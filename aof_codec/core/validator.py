"""
Pre-encode validation of replay records.

Hard failures stop the encode. Soft findings are returned as warnings and
travel with the encoded result.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import MissingFieldError, NoChunksError, NoKeyframesError, ValidationError
from .replay import ReplayRecord


NO_PLAYERS_WARNING = 'No players'

# Wire name -> attribute. Zero and empty values count as missing.
REQUIRED_FIELDS = (
    ('regionId', 'region_id'),
    ('gameId', 'game_id'),
    ('riotVersion', 'riot_version'),
    ('key', 'key'),
    ('endStartupChunkId', 'end_startup_chunk_id'),
    ('startGameChunkId', 'start_game_chunk_id'),
)


@dataclass
class ValidationReport:
    """Outcome of validating a record."""
    error: Optional[ValidationError] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def validate(record: ReplayRecord) -> ValidationReport:
    """
    Check that a record can be encoded.

    Order of checks: mandatory metadata, roster, keyframes, chunks. Hard
    failures carry no warnings.

    Args:
        record: Record to check (not modified)

    Returns:
        ValidationReport with either an error or the list of warnings
    """
    meta = record.metadata

    missing = [name for name, attr in REQUIRED_FIELDS if not getattr(meta, attr)]
    if missing:
        return ValidationReport(error=MissingFieldError(missing))

    warnings = []
    if meta.players is not None and len(meta.players) == 0:
        warnings.append(NO_PLAYERS_WARNING)

    data = record.data
    if data is None or not data.keyframes:
        return ValidationReport(error=NoKeyframesError())

    if not data.chunks:
        return ValidationReport(error=NoChunksError())

    return ValidationReport(warnings=warnings)
