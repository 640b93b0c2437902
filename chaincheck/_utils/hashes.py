from eth_typing import (
    Hash32,
)
from eth_utils import (
    decode_hex,
    encode_hex,
    is_0x_prefixed,
    is_hex,
    remove_0x_prefix,
)

from chaincheck.constants import (
    HASH_HEX_LENGTH,
    HASH_SIZE,
)
from chaincheck.exceptions import (
    MalformedHash,
)


def decode_checkpoint_hash(value: str) -> Hash32:
    """
    Decode the unprefixed 64 character hex form of a block hash, as used by
    checkpoint files and DNS records.
    """
    if not isinstance(value, str):
        raise MalformedHash(f"Checkpoint hash must be a string, got {type(value)}")
    if len(value) != HASH_HEX_LENGTH:
        raise MalformedHash(
            f"Checkpoint hash must be {HASH_HEX_LENGTH} hex characters, "
            f"got {len(value)}: {value!r}"
        )
    if is_0x_prefixed(value) or not is_hex(value):
        raise MalformedHash(f"Checkpoint hash is not a hex string: {value!r}")

    return Hash32(decode_hex(value))


def encode_checkpoint_hash(block_hash: bytes) -> str:
    if not isinstance(block_hash, bytes) or len(block_hash) != HASH_SIZE:
        raise MalformedHash(f"Block hash must be {HASH_SIZE} bytes, got {block_hash!r}")
    return remove_0x_prefix(encode_hex(block_hash))
