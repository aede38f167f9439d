"""
File storage for AOF replays.

save() encodes first and only then touches the filesystem, so a record that
fails validation never produces a file. The finished buffer is written in a
single call. load() reads the whole file before decoding.

OSError from the filesystem is not wrapped.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .codec.decoder import decode
from .codec.encoder import encode
from .config.schema import AofConfig
from .core.replay import ReplayData, ReplayMetadata, ReplayRecord

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    """Where a replay was written and what validation had to say about it."""
    path: Path
    size: int
    warnings: List[str] = field(default_factory=list)


def save(
    record: ReplayRecord,
    filename: Union[str, Path],
    config: Optional[AofConfig] = None,
) -> SaveResult:
    """
    Encode a record and write it to `filename` + extension.

    Args:
        record: Replay to store
        filename: Target path without extension; relative paths resolve
            against the configured storage directory
        config: Storage settings (defaults apply when omitted)

    Returns:
        SaveResult with the written path and encode warnings

    Raises:
        ValidationError: record cannot be encoded (nothing is written)
        OSError: the write failed
    """
    config = config or AofConfig()
    result = encode(record)

    for warning in result.warnings:
        logger.warning(f"Replay {record.metadata.game_id}: {warning}")

    path = config.storage.target(str(filename))
    path.write_bytes(result.data)

    logger.info(f"Wrote replay {record.metadata.game_id} to {path} ({len(result.data)} bytes)")
    return SaveResult(path=path, size=len(result.data), warnings=result.warnings)


def load(path: Union[str, Path]) -> Tuple[ReplayMetadata, ReplayData]:
    """
    Read and decode a replay file.

    Raises:
        FormatError: file is not a readable AOF buffer
        NoKeyframesError, NoChunksError: file holds no fragments of a kind
        OSError: the read failed
    """
    path = Path(path)
    buffer = path.read_bytes()
    logger.debug(f"Read {len(buffer)} bytes from {path}")

    metadata, data = decode(buffer)
    logger.info(
        f"Loaded replay {metadata.game_id} from {path} "
        f"(revision {metadata.file_version}, "
        f"{len(data.keyframes)} keyframes, {len(data.chunks)} chunks)"
    )
    return metadata, data
