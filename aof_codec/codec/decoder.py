"""
Replay decoder.

Reads any supported revision (8, 10, 11, 12). The revision byte selects a
RevisionPolicy which supplies every width that differs between revisions;
the parser itself has no per-revision branches.

The whole buffer must be in memory. Any read past its end raises
TruncatedInputError and nothing is returned.
"""

import base64
from typing import List, Tuple, Type

from ..core.errors import NoChunksError, NoKeyframesError
from ..core.replay import (
    Chunk,
    Fragment,
    FragmentMap,
    Keyframe,
    Player,
    ReplayData,
    ReplayMetadata,
)
from ..formats.revisions import RevisionPolicy, policy_for
from ..formats.wire import ByteReader


class ReplayDecoder:
    """
    Parses AOF buffers.

    Usage:
        metadata, data = ReplayDecoder().decode(buffer)
    """

    def decode(self, buffer: bytes) -> Tuple[ReplayMetadata, ReplayData]:
        """
        Decode a complete buffer.

        Raises:
            ObsoleteFormatError: revision < 8
            CorruptFormatError: revision 9
            UnsupportedFormatError: revision newer than the current one
            TruncatedInputError: buffer ends early
            NoKeyframesError, NoChunksError: buffer holds no fragments of a kind
        """
        reader = ByteReader(buffer)

        revision = reader.u8('revision')
        policy = policy_for(revision)

        meta = ReplayMetadata(file_version=revision)
        meta.region_id = reader.u8('regionId')
        meta.game_id = policy.read_game_id(reader)
        meta.riot_version = '.'.join(
            str(reader.u8('riotVersion')) for _ in range(3)
        )

        key = reader.read(reader.u8('key length'), 'key')
        meta.key = base64.b64encode(key).decode('ascii')
        meta.complete = reader.u8('complete') != 0
        meta.end_startup_chunk_id = reader.u8('endStartupChunkId')
        meta.start_game_chunk_id = reader.u8('startGameChunkId')

        meta.players = self._read_players(reader)

        keyframes = self._read_fragments(reader, policy, Keyframe)
        if not keyframes:
            raise NoKeyframesError()

        chunks = self._read_fragments(reader, policy, Chunk)
        if not chunks:
            raise NoChunksError()

        meta.end_game_chunk_id = chunks.last_id

        return meta, ReplayData(keyframes=keyframes, chunks=chunks)

    def _read_players(self, reader: ByteReader) -> List[Player]:
        players = []
        for _ in range(reader.u8('player count')):
            player_id = reader.i32('player id')
            name = reader.read(reader.u8('player name length'), 'player name')
            players.append(Player(
                id=player_id,
                name=name.decode('utf-8', errors='replace'),
                team_nr=reader.u8('teamNr'),
                league_id=reader.u8('leagueId'),
                league_rank=reader.u8('leagueRank'),
                champion_id=reader.i32('championId'),
                spell1_id=reader.i32('spell1Id'),
                spell2_id=reader.i32('spell2Id'),
            ))
        return players

    def _read_fragments(
        self,
        reader: ByteReader,
        policy: RevisionPolicy,
        kind: Type[Fragment],
    ) -> FragmentMap:
        what = kind.__name__.lower()
        fragments = FragmentMap()

        count = policy.read_count(reader, f'{what} count')
        for position in range(count):
            fragment_id = policy.read_fragment_id(reader, position, f'{what} id')
            size = reader.i32(f'{what} length')
            fragments.add(kind(id=fragment_id, data=reader.read(size, f'{what} data')))

        return fragments


def decode(buffer: bytes) -> Tuple[ReplayMetadata, ReplayData]:
    """Decode a buffer of any supported revision."""
    return ReplayDecoder().decode(buffer)
