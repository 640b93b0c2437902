from typing import (
    Mapping,
    NamedTuple,
    Tuple,
)

from eth_typing import (
    BlockNumber,
    Hash32,
)


class CheckpointEntry(NamedTuple):
    height: BlockNumber
    block_hash: Hash32


class CheckpointRecord(NamedTuple):
    """
    A checkpoint as it appears in a source, before its hash has been decoded.
    """
    height: int
    hash: str


CheckpointPoints = Mapping[BlockNumber, Hash32]

# (height, hex hash) pairs, as compiled into the program
RawCheckpoints = Tuple[Tuple[int, str], ...]
