from eth_typing import (
    Hash32,
)
from eth_utils import (
    ValidationError,
    encode_hex,
)


class ChainCheckError(Exception):
    """
    Base class for all chaincheck errors.
    """


class MalformedHash(ChainCheckError, ValidationError):
    """
    Raised when a checkpoint hash is not exactly 64 hex characters (32 bytes).
    """


class ConflictingCheckpoint(ChainCheckError):
    """
    Raised when a checkpoint is added at a height that is already pinned to a
    different hash. The existing entry is never overwritten.
    """

    def __init__(self, height: int, existing_hash: Hash32, new_hash: Hash32) -> None:
        super().__init__(
            f"Checkpoint at height {height} already exists with hash "
            f"{encode_hex(existing_hash)}, refusing {encode_hex(new_hash)}"
        )
        self.height = height
        self.existing_hash = existing_hash
        self.new_hash = new_hash


class CheckpointMismatch(ChainCheckError, ValidationError):
    """
    Raised when a block at a checkpointed height does not carry the pinned hash.
    """

    def __init__(self, height: int, expected_hash: Hash32, actual_hash: Hash32) -> None:
        super().__init__(
            f"Checkpoint failed for height {height}. Expected hash: "
            f"{encode_hex(expected_hash)}, fetched hash: {encode_hex(actual_hash)}"
        )
        self.height = height
        self.expected_hash = expected_hash
        self.actual_hash = actual_hash


class InvalidForkHeight(ChainCheckError, ValidationError):
    """
    Raised when an alternative chain claims to branch at height 0.
    """


class ForkBeforeCheckpoint(ChainCheckError, ValidationError):
    """
    Raised when an alternative chain would rewrite a block at or below a checkpoint.
    """

    def __init__(self, fork_height: int, checkpoint_height: int) -> None:
        super().__init__(
            f"Alternative chain branching at {fork_height} would rewrite history "
            f"at or before the checkpoint at {checkpoint_height}"
        )
        self.fork_height = fork_height
        self.checkpoint_height = checkpoint_height


class EmptyStore(ChainCheckError):
    """
    Raised when asking for the highest checkpoint of a store with no checkpoints.
    """


class ResourceUnavailable(ChainCheckError):
    """
    Raised when a checkpoint source has nothing to offer, e.g. no DNS answers.
    Never fatal on its own.
    """


class ResourceCorrupt(ChainCheckError):
    """
    Raised when a checkpoint file exists but cannot be parsed.
    """

    def __init__(self, msg: str, path: object) -> None:
        super().__init__(msg)
        self.path = path


class UnknownNetworkProfile(ChainCheckError):
    """
    Raised when a network profile has no preconfigured checkpoint sources.
    """
