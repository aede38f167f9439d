"""Pytest fixtures and helpers for AOF codec tests."""

import struct
from typing import Iterable, List, Optional, Tuple

import pytest

from aof_codec.core.replay import (
    Chunk,
    Keyframe,
    Player,
    ReplayMetadata,
    ReplayRecord,
)


KEYFRAME_DATA = b'\x01\x02\x03'
CHUNK_DATA = b'0123456789'


def make_metadata(**overrides) -> ReplayMetadata:
    """Metadata for the reference game, with optional field overrides."""
    fields = dict(
        region_id=1,
        game_id=5_000_000_000,
        riot_version='7.10.154',
        key='YWJj',
        end_startup_chunk_id=1,
        start_game_chunk_id=1,
        players=[Player(
            id=42, name='Ahri', team_nr=0, league_id=3, league_rank=1,
            champion_id=103, spell1_id=4, spell2_id=14,
        )],
    )
    fields.update(overrides)
    return ReplayMetadata(**fields)


def make_record(
    keyframe_ids: Iterable[int] = (1,),
    chunk_ids: Iterable[int] = (1,),
    **overrides,
) -> ReplayRecord:
    """Reference record with one fragment of each kind per requested id."""
    return ReplayRecord.build(
        make_metadata(**overrides),
        keyframes=[Keyframe(i, KEYFRAME_DATA) for i in keyframe_ids],
        chunks=[Chunk(i, CHUNK_DATA) for i in chunk_ids],
    )


def legacy_buffer(
    revision: int,
    game_id: int = 5_000_000_000,
    keyframes: Optional[List[Tuple[int, bytes]]] = None,
    chunks: Optional[List[Tuple[int, bytes]]] = None,
    players: Optional[List[Tuple[int, str]]] = None,
) -> bytes:
    """
    Hand-assemble a buffer in the layout of an older revision.

    Fragment ids are written as u8 (rev < 12) or u16 (rev 12). For revision
    11 the id slot still takes one byte but readers must ignore it.
    """
    if keyframes is None:
        keyframes = [(1, KEYFRAME_DATA)]
    if chunks is None:
        chunks = [(1, CHUNK_DATA)]
    if players is None:
        players = [(42, 'Ahri')]

    out = struct.pack('>BB', revision, 1)
    if revision == 8:
        out += struct.pack('>I', game_id)
    else:
        out += struct.pack('>II', game_id // 2**32, game_id % 2**32)
    out += struct.pack('>BBBB', 7, 10, 154, 3) + b'abc'
    out += struct.pack('>BBB', 1, 1, 1)

    out += struct.pack('>B', len(players))
    for player_id, name in players:
        raw = name.encode('utf-8')
        out += struct.pack('>iB', player_id, len(raw)) + raw
        out += struct.pack('>BBBiii', 0, 3, 1, 103, 4, 14)

    count_fmt = '>B' if revision < 11 else '>H'
    id_fmt = '>H' if revision >= 12 else '>B'
    for fragments in (keyframes, chunks):
        out += struct.pack(count_fmt, len(fragments))
        for fragment_id, data in fragments:
            out += struct.pack(id_fmt, fragment_id)
            out += struct.pack('>i', len(data)) + data

    return out


@pytest.fixture
def example_record() -> ReplayRecord:
    """Region 1, game 5_000_000_000, one player, one keyframe, one chunk."""
    return make_record()


@pytest.fixture
def example_bytes() -> bytes:
    """Byte-exact encoding of example_record."""
    return (
        struct.pack('>BBII', 12, 1, 1, 0x2A05F200)
        + struct.pack('>BBBB', 7, 10, 154, 3) + b'abc'
        + struct.pack('>BBB', 1, 1, 1)
        + struct.pack('>B', 1)
        + struct.pack('>iB', 42, 4) + b'Ahri'
        + struct.pack('>BBBiii', 0, 3, 1, 103, 4, 14)
        + struct.pack('>HHi', 1, 1, 3) + KEYFRAME_DATA
        + struct.pack('>HHi', 1, 1, 10) + CHUNK_DATA
    )
