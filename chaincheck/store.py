import bisect
import enum
import threading
from types import (
    MappingProxyType,
)
from typing import (
    Dict,
    Iterator,
    List,
    Optional,
    Tuple,
)

from eth_typing import (
    BlockNumber,
    Hash32,
)
from eth_utils import (
    encode_hex,
    get_extended_debug_logger,
)

from chaincheck._utils.hashes import (
    decode_checkpoint_hash,
)
from chaincheck.constants import (
    GENESIS_BLOCK_NUMBER,
)
from chaincheck.exceptions import (
    CheckpointMismatch,
    ConflictingCheckpoint,
    EmptyStore,
    ForkBeforeCheckpoint,
    InvalidForkHeight,
)
from chaincheck.typing import (
    CheckpointEntry,
    CheckpointPoints,
)
from chaincheck.validation import (
    validate_block_hash,
    validate_checkpoint_height,
)


class CheckpointVerdict(enum.Enum):
    ACCEPT = enum.auto()
    REJECT = enum.auto()
    NOT_CHECKPOINTED = enum.auto()


class CheckpointStore:
    """
    The set of (height, block hash) pairs pinned as canonical history.

    Entries can only be added. Adding the same pair twice is a no-op, adding a
    different hash at a pinned height raises :class:`ConflictingCheckpoint`.
    All access goes through one lock, so the store can be reloaded while
    validation threads read from it.
    """
    logger = get_extended_debug_logger('chaincheck.store.CheckpointStore')

    def __init__(self) -> None:
        self._points: Dict[BlockNumber, Hash32] = {}
        # ascending, kept in step with _points
        self._heights: List[BlockNumber] = []
        self._lock = threading.RLock()

    #
    # Insertion
    #
    def insert(self, height: int, block_hash: Hash32) -> None:
        validate_checkpoint_height(height)
        validate_block_hash(block_hash)

        with self._lock:
            existing_hash = self._points.get(BlockNumber(height))
            if existing_hash is None:
                self._points[BlockNumber(height)] = block_hash
                bisect.insort(self._heights, BlockNumber(height))
            elif existing_hash != block_hash:
                raise ConflictingCheckpoint(height, existing_hash, block_hash)

    def insert_hex(self, height: int, hex_hash: str) -> None:
        """
        Add a checkpoint whose hash is given as 64 hex characters.

        :raises MalformedHash: before the store is touched, if the hash does not decode
        :raises ConflictingCheckpoint: if the height is pinned to another hash
        """
        block_hash = decode_checkpoint_hash(hex_hash)
        self.insert(height, block_hash)

    def check_for_conflicts(self, other: 'CheckpointStore') -> None:
        """
        Raise :class:`ConflictingCheckpoint` for the first height that both
        stores pin to different hashes.
        """
        other_points = other.get_points()
        with self._lock:
            self._check_for_conflicts(other_points)

    def merge_from(self, other: 'CheckpointStore') -> None:
        """
        Add every checkpoint of ``other`` to this store.

        The merge is all-or-nothing: conflicts are checked before anything is
        written, so a failing merge leaves this store unchanged.
        """
        if other is self:
            return

        other_points = other.get_points()
        with self._lock:
            self._check_for_conflicts(other_points)
            for height, block_hash in other_points.items():
                self.insert(height, block_hash)

    def _check_for_conflicts(self, other_points: CheckpointPoints) -> None:
        for height, block_hash in sorted(other_points.items()):
            existing_hash = self._points.get(height)
            if existing_hash is not None and existing_hash != block_hash:
                raise ConflictingCheckpoint(height, existing_hash, block_hash)

    #
    # Queries
    #
    def lookup(self, height: int) -> Optional[Hash32]:
        with self._lock:
            return self._points.get(BlockNumber(height))

    def max_height(self) -> BlockNumber:
        """
        Return the highest checkpointed height.

        :raises EmptyStore: if there are no checkpoints
        """
        with self._lock:
            if not self._heights:
                raise EmptyStore("No checkpoints have been added")
            return self._heights[-1]

    def is_within_checkpoint_range(self, height: int) -> bool:
        with self._lock:
            return bool(self._heights) and height <= self._heights[-1]

    def verify_block(self, height: int, block_hash: Hash32) -> CheckpointVerdict:
        expected_hash = self.lookup(height)

        if expected_hash is None:
            return CheckpointVerdict.NOT_CHECKPOINTED
        elif expected_hash == block_hash:
            self.logger.debug2("Checkpoint passed for height %d %s", height, encode_hex(block_hash))
            return CheckpointVerdict.ACCEPT
        else:
            self.logger.warning(
                "Checkpoint failed for height %d. Expected hash: %s, fetched hash: %s",
                height,
                encode_hex(expected_hash),
                encode_hex(block_hash),
            )
            return CheckpointVerdict.REJECT

    def validate_block(self, height: int, block_hash: Hash32) -> None:
        """
        Like :meth:`verify_block`, but raise :class:`CheckpointMismatch` on a reject.
        """
        if self.verify_block(height, block_hash) is CheckpointVerdict.REJECT:
            expected_hash = self.lookup(height)
            raise CheckpointMismatch(height, expected_hash, block_hash)

    def _get_checkpoint_height_at_or_below(self, height: int) -> Optional[BlockNumber]:
        with self._lock:
            idx = bisect.bisect_right(self._heights, height)
            if idx == 0:
                return None
            return self._heights[idx - 1]

    def is_alternative_chain_allowed(self, current_height: int, fork_height: int) -> bool:
        """
        Whether a competing chain branching at ``fork_height`` may be considered
        while the local chain is at ``current_height``. A fork may never
        replace a block at or below the nearest checkpoint under the local tip.
        """
        if fork_height == GENESIS_BLOCK_NUMBER:
            return False

        checkpoint_height = self._get_checkpoint_height_at_or_below(current_height)
        if checkpoint_height is None:
            # local chain is below the first checkpoint
            return True

        return fork_height > checkpoint_height

    def validate_alternative_chain(self, current_height: int, fork_height: int) -> None:
        if fork_height == GENESIS_BLOCK_NUMBER:
            raise InvalidForkHeight("Alternative chain cannot branch at the genesis block")

        checkpoint_height = self._get_checkpoint_height_at_or_below(current_height)
        if checkpoint_height is not None and fork_height <= checkpoint_height:
            raise ForkBeforeCheckpoint(fork_height, checkpoint_height)

    #
    # Container API
    #
    def get_points(self) -> CheckpointPoints:
        """
        Return a read-only snapshot of all checkpoints.
        """
        with self._lock:
            return MappingProxyType(dict(self._points))

    def entries(self) -> Tuple[CheckpointEntry, ...]:
        with self._lock:
            return tuple(
                CheckpointEntry(height, self._points[height])
                for height in self._heights
            )

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._heights

    def __len__(self) -> int:
        with self._lock:
            return len(self._heights)

    def __contains__(self, height: object) -> bool:
        with self._lock:
            return height in self._points

    def __iter__(self) -> Iterator[BlockNumber]:
        with self._lock:
            return iter(tuple(self._heights))

    def __repr__(self) -> str:
        with self._lock:
            if not self._heights:
                return "<CheckpointStore empty>"
            return (
                f"<CheckpointStore count={len(self._heights)} "
                f"heights={self._heights[0]}..{self._heights[-1]}>"
            )
