"""
Replay encoder.

Writes the current revision only. Layout (big-endian):

    u8        revision (12)
    u8        region id
    u32 u32   game id high, low
    u8 x3     riot version major, minor, patch
    u8 + n    key length, raw key bytes
    u8        complete flag
    u8 u8     end-of-startup chunk id, start-of-game chunk id
    u8        player count, then per player:
                i32 id, u8 + n name, u8 team, u8 league id, u8 league rank,
                i32 champion, i32 spell1, i32 spell2
    u16       keyframe count, then per keyframe: u16 id, i32 length, bytes
    u16       chunk count, then per chunk: u16 id, i32 length, bytes
"""

import base64
import binascii
from dataclasses import dataclass, field
from typing import List

from ..core.errors import FieldRangeError
from ..core.replay import FragmentMap, Player, ReplayRecord
from ..core.validator import validate
from ..formats.revisions import CURRENT_REVISION
from ..formats.wire import ByteWriter


@dataclass
class EncodeResult:
    """Encoded buffer plus any validation warnings."""
    data: bytes
    warnings: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.data)


def is_complete(keyframes: FragmentMap, chunks: FragmentMap) -> bool:
    """
    Legacy completeness heuristic.

    A collection counts as complete when its populated entries equal its
    sparse length minus one, i.e. ids 1..N with no gaps. Both collections
    must satisfy it. Existing files depend on this exact rule.
    """
    return (
        len(keyframes) == keyframes.nominal_length - 1
        and len(chunks) == chunks.nominal_length - 1
    )


def parse_riot_version(version: str) -> List[int]:
    """Split "7.10.154" into three u8 components."""
    parts = str(version).split('.')
    if len(parts) != 3:
        raise FieldRangeError('riotVersion', version, 'major.minor.patch')
    try:
        return [int(part) for part in parts]
    except ValueError:
        raise FieldRangeError('riotVersion', version, 'major.minor.patch') from None


def decode_key(key: str) -> bytes:
    """Base64 text -> raw key bytes."""
    try:
        return base64.b64decode(key)
    except (binascii.Error, ValueError):
        raise FieldRangeError('key', key, 'base64 text') from None


class ReplayEncoder:
    """
    Serializes replay records.

    Always writes CURRENT_REVISION. Stateless; one instance may be shared
    between threads.
    """

    def encode(self, record: ReplayRecord) -> EncodeResult:
        """
        Validate and encode a record.

        Raises:
            MissingFieldError, NoKeyframesError, NoChunksError: from validation
            FieldRangeError: a value does not fit its wire width
        """
        report = validate(record)
        report.raise_for_error()

        try:
            data = self._encode_validated(record)
        except FieldRangeError as e:
            e.warnings = list(report.warnings)
            raise

        return EncodeResult(data=data, warnings=report.warnings)

    def _encode_validated(self, record: ReplayRecord) -> bytes:
        meta = record.metadata
        keyframes = record.data.keyframes
        chunks = record.data.chunks
        players = meta.players or []

        writer = ByteWriter()
        writer.u8(CURRENT_REVISION, 'revision')
        writer.u8(meta.region_id, 'regionId')
        self._write_game_id(writer, meta.game_id)

        for part, name in zip(parse_riot_version(meta.riot_version), ('major', 'minor', 'patch')):
            writer.u8(part, f'riotVersion {name}')

        writer.sized_u8(decode_key(meta.key), 'key')
        writer.u8(1 if is_complete(keyframes, chunks) else 0, 'complete')
        writer.u8(meta.end_startup_chunk_id, 'endStartupChunkId')
        writer.u8(meta.start_game_chunk_id, 'startGameChunkId')

        writer.u8(len(players), 'player count')
        for index, player in enumerate(players):
            self._write_player(writer, player, index)

        self._write_fragments(writer, keyframes, 'keyframe')
        self._write_fragments(writer, chunks, 'chunk')

        return writer.getvalue()

    def _write_game_id(self, writer: ByteWriter, game_id: int) -> None:
        if not isinstance(game_id, int) or not 0 <= game_id <= 0xFFFFFFFFFFFFFFFF:
            raise FieldRangeError('gameId', game_id, 'u64')
        writer.u32(game_id // 0x100000000, 'gameId high')
        writer.u32(game_id % 0x100000000, 'gameId low')

    def _write_player(self, writer: ByteWriter, player: Player, index: int) -> None:
        prefix = f'players[{index}]'
        writer.i32(player.id, f'{prefix}.id')
        writer.sized_u8(player.name.encode('utf-8'), f'{prefix}.name')
        writer.u8(player.team_nr, f'{prefix}.teamNr')
        writer.u8(player.league_id, f'{prefix}.leagueId')
        writer.u8(player.league_rank, f'{prefix}.leagueRank')
        writer.i32(player.champion_id, f'{prefix}.championId')
        writer.i32(player.spell1_id, f'{prefix}.spell1Id')
        writer.i32(player.spell2_id, f'{prefix}.spell2Id')

    def _write_fragments(self, writer: ByteWriter, fragments: FragmentMap, kind: str) -> None:
        writer.u16(len(fragments), f'{kind} count')
        for fragment in fragments:
            writer.u16(fragment.id, f'{kind} id')
            writer.sized_i32(fragment.data, f'{kind} {fragment.id} data')


def encode(record: ReplayRecord) -> EncodeResult:
    """Encode a record with the current revision."""
    return ReplayEncoder().encode(record)
