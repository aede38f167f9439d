"""
Format revision table.

The first byte of every AOF buffer is the revision. It decides how wide the
game id, fragment counts and fragment ids are, and whether fragment ids are
stored at all:

    rev   game id     count   fragment id
    <8    rejected (obsolete)
    8     u32         u8      u8
    9     rejected (known-corrupt writer)
    10    2x u32      u8      u8
    11    2x u32      u16     u8 slot, ignored; id = position + 1
    12    2x u32      u16     u16

Only the decoder consults this table; the encoder writes CURRENT_REVISION.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from ..core.errors import (
    CorruptFormatError,
    ObsoleteFormatError,
    UnsupportedFormatError,
)
from .wire import ByteReader


CURRENT_REVISION = 12
MIN_REVISION = 8
CORRUPT_REVISIONS = frozenset({9})


class IdStrategy(Enum):
    """How fragment ids are obtained from the stream."""

    # Id is stored in front of each fragment
    EXPLICIT = 'explicit'

    # A slot is present but its value is meaningless; id = position + 1
    POSITIONAL = 'positional'


@dataclass(frozen=True)
class RevisionPolicy:
    """Field widths and id derivation rules for one revision."""

    revision: int
    game_id_halves: int      # 1 = single u32, 2 = high/low u32 pair
    count_width: int         # bytes used for keyframe/chunk counts
    id_width: int            # bytes occupied by each fragment id slot
    id_strategy: IdStrategy

    def read_game_id(self, reader: ByteReader) -> int:
        if self.game_id_halves == 1:
            return reader.u32('gameId')
        high = reader.u32('gameId high')
        low = reader.u32('gameId low')
        return high * 0x100000000 + low

    def read_count(self, reader: ByteReader, what: str) -> int:
        if self.count_width == 1:
            return reader.u8(what)
        return reader.u16(what)

    def read_fragment_id(self, reader: ByteReader, position: int, what: str) -> int:
        """Read (or synthesize) the id of the fragment at `position`."""
        if self.id_strategy is IdStrategy.POSITIONAL:
            reader.skip(self.id_width, what)
            return position + 1
        if self.id_width == 1:
            return reader.u8(what)
        return reader.u16(what)


REVISIONS: Dict[int, RevisionPolicy] = {
    8: RevisionPolicy(8, game_id_halves=1, count_width=1, id_width=1,
                      id_strategy=IdStrategy.EXPLICIT),
    10: RevisionPolicy(10, game_id_halves=2, count_width=1, id_width=1,
                       id_strategy=IdStrategy.EXPLICIT),
    11: RevisionPolicy(11, game_id_halves=2, count_width=2, id_width=1,
                       id_strategy=IdStrategy.POSITIONAL),
    12: RevisionPolicy(12, game_id_halves=2, count_width=2, id_width=2,
                       id_strategy=IdStrategy.EXPLICIT),
}


def is_rejected(revision: int) -> bool:
    """True for revisions that must never be parsed."""
    return revision < MIN_REVISION or revision in CORRUPT_REVISIONS


def policy_for(revision: int) -> RevisionPolicy:
    """
    Look up the policy for a revision read from a buffer.

    Raises:
        ObsoleteFormatError: revision < 8
        CorruptFormatError: revision 9
        UnsupportedFormatError: revision newer than CURRENT_REVISION
    """
    if revision < MIN_REVISION:
        raise ObsoleteFormatError(context={'revision': revision})
    if revision in CORRUPT_REVISIONS:
        raise CorruptFormatError(context={'revision': revision})

    policy = REVISIONS.get(revision)
    if policy is None:
        raise UnsupportedFormatError(context={
            'revision': revision,
            'latest': CURRENT_REVISION,
        })
    return policy


CURRENT_POLICY = REVISIONS[CURRENT_REVISION]
