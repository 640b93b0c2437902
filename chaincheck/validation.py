from typing import (
    Union,
)

from eth_utils import (
    ValidationError,
)

from chaincheck.constants import (
    HASH_SIZE,
    UINT_64_MAX,
)


def validate_is_integer(value: Union[int, bool], title: str="Value") -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"{title} must be an integer.  Got: {type(value)}")


def validate_checkpoint_height(value: int, title: str="Height") -> None:
    validate_is_integer(value, title=title)
    if value < 0:
        raise ValidationError(f"{title} must not be negative.  Got: {value}")
    if value > UINT_64_MAX:
        raise ValidationError(f"{title} {value} does not fit in an unsigned 64-bit integer")


def validate_block_hash(value: bytes, title: str="Block hash") -> None:
    if not isinstance(value, bytes):
        raise ValidationError(f"{title} must be a byte string.  Got: {type(value)}")
    if len(value) != HASH_SIZE:
        raise ValidationError(
            f"{title} must be of length {HASH_SIZE}.  Got {value!r} of length {len(value)}"
        )
