"""
In-memory replay model.

A replay is match metadata (including the player roster) plus two
independent fragment collections: keyframes (full-state snapshots) and
chunks (incremental updates). Both collections are keyed by fragment id.

FragmentMap replaces the sparse id-indexed array the format was designed
around. Iteration is always in ascending id order, which is the order the
encoder writes fragments in.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Union


@dataclass
class Player:
    """
    One entry of the player roster.

    Attributes:
        id: Player identifier (i32 on the wire)
        name: Summoner name, UTF-8 encoded on the wire (<= 255 bytes)
        team_nr: Team number (u8)
        league_id: League identifier (u8)
        league_rank: Rank within the league (u8)
        champion_id: Champion played (i32)
        spell1_id: First summoner spell (i32)
        spell2_id: Second summoner spell (i32)
    """
    id: int
    name: str
    team_nr: int = 0
    league_id: int = 0
    league_rank: int = 0
    champion_id: int = 0
    spell1_id: int = 0
    spell2_id: int = 0

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'team_nr': self.team_nr,
            'league_id': self.league_id,
            'league_rank': self.league_rank,
            'champion_id': self.champion_id,
            'spell1_id': self.spell1_id,
            'spell2_id': self.spell2_id,
        }


@dataclass
class Fragment:
    """A binary payload identified by an unsigned id."""
    id: int
    data: bytes = b''

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, size={len(self.data)})"


@dataclass(repr=False)
class Keyframe(Fragment):
    """Full-state snapshot."""


@dataclass(repr=False)
class Chunk(Fragment):
    """Incremental update between keyframes."""


class FragmentMap:
    """
    Fragments keyed by id, iterated in ascending id order.

    Usage:
        chunks = FragmentMap([Chunk(1, b'...'), Chunk(2, b'...')])
        chunks.add(Chunk(5, b'...'))
        for chunk in chunks:          # ids 1, 2, 5
            ...

    Adding a fragment whose id is already present replaces the earlier one.
    """

    def __init__(self, fragments: Optional[Iterable[Fragment]] = None):
        self._items: Dict[int, Fragment] = {}
        for fragment in fragments or ():
            self.add(fragment)

    def add(self, fragment: Fragment) -> None:
        self._items[fragment.id] = fragment

    def get(self, fragment_id: int) -> Optional[Fragment]:
        return self._items.get(fragment_id)

    def ids(self) -> List[int]:
        return sorted(self._items)

    def __getitem__(self, fragment_id: int) -> Fragment:
        return self._items[fragment_id]

    def __contains__(self, fragment_id: object) -> bool:
        return fragment_id in self._items

    def __iter__(self) -> Iterator[Fragment]:
        for fragment_id in self.ids():
            yield self._items[fragment_id]

    def __len__(self) -> int:
        """Number of populated entries."""
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FragmentMap):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"FragmentMap(ids={self.ids()})"

    @property
    def nominal_length(self) -> int:
        """
        Length of the equivalent sparse array: highest id + 1, or 0 if empty.

        The completeness flag is defined against this value.
        """
        if not self._items:
            return 0
        return max(self._items) + 1

    @property
    def last_id(self) -> Optional[int]:
        if not self._items:
            return None
        return max(self._items)

    @property
    def total_bytes(self) -> int:
        return sum(len(f.data) for f in self._items.values())


@dataclass
class ReplayMetadata:
    """
    Match metadata.

    Attributes:
        region_id: Platform region (u8)
        game_id: Match identifier (u64, written as two u32 halves)
        riot_version: Engine version, "major.minor.patch"
        key: Opaque key blob as base64 text
        end_startup_chunk_id: Chunk that ends the startup phase
        start_game_chunk_id: Chunk where the game proper starts
        players: Roster in write order; None is treated as empty
        complete: Whether every fragment of the recording is present.
            Derived on encode; any value set by the caller is ignored.
        end_game_chunk_id: Last chunk id (decode only)
        file_version: Revision the buffer was read from (decode only)
    """
    region_id: int = 0
    game_id: int = 0
    riot_version: str = ''
    key: str = ''
    end_startup_chunk_id: int = 0
    start_game_chunk_id: int = 0
    players: Optional[List[Player]] = None
    complete: bool = False
    end_game_chunk_id: Optional[int] = None
    file_version: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            'file_version': self.file_version,
            'region_id': self.region_id,
            'game_id': self.game_id,
            'riot_version': self.riot_version,
            'key': self.key,
            'complete': self.complete,
            'end_startup_chunk_id': self.end_startup_chunk_id,
            'start_game_chunk_id': self.start_game_chunk_id,
            'end_game_chunk_id': self.end_game_chunk_id,
            'players': [p.to_dict() for p in self.players or []],
        }


@dataclass
class ReplayData:
    """Keyframe and chunk collections."""
    keyframes: Optional[FragmentMap] = None
    chunks: Optional[FragmentMap] = None

    def to_dict(self) -> dict:
        def summary(fragments: Optional[FragmentMap]) -> dict:
            fragments = fragments or FragmentMap()
            return {
                'count': len(fragments),
                'ids': fragments.ids(),
                'total_bytes': fragments.total_bytes,
            }

        return {
            'keyframes': summary(self.keyframes),
            'chunks': summary(self.chunks),
        }


@dataclass
class ReplayRecord:
    """Everything the encoder needs: metadata plus fragment data."""
    metadata: ReplayMetadata
    data: ReplayData = field(default_factory=ReplayData)

    @classmethod
    def build(
        cls,
        metadata: ReplayMetadata,
        keyframes: Union[FragmentMap, Iterable[Fragment], None] = None,
        chunks: Union[FragmentMap, Iterable[Fragment], None] = None,
    ) -> 'ReplayRecord':
        """Create a record, wrapping plain fragment iterables in FragmentMaps."""
        def as_map(fragments):
            if fragments is None or isinstance(fragments, FragmentMap):
                return fragments
            return FragmentMap(fragments)

        return cls(
            metadata=metadata,
            data=ReplayData(keyframes=as_map(keyframes), chunks=as_map(chunks)),
        )
