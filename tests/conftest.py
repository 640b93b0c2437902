import json

from eth_typing import (
    Hash32,
)
from eth_utils import (
    setup_DEBUG2_logging,
)
import pytest

from chaincheck._utils.hashes import (
    encode_checkpoint_hash,
)
from chaincheck.store import (
    CheckpointStore,
)

#
#  Setup DEBUG2 level logging.
#
setup_DEBUG2_logging()


def _make_hash(seed: int) -> Hash32:
    return Hash32(seed.to_bytes(32, 'big'))


def _make_hex_hash(seed: int) -> str:
    return encode_checkpoint_hash(_make_hash(seed))


@pytest.fixture
def make_hash():
    return _make_hash


@pytest.fixture
def make_hex_hash():
    return _make_hex_hash


@pytest.fixture
def store():
    return CheckpointStore()


@pytest.fixture
def populated_store():
    """
    Checkpoints at 100, 200 and 300, each pinned to the hash built from its height.
    """
    store = CheckpointStore()
    for height in (100, 200, 300):
        store.insert(height, _make_hash(height))
    return store


@pytest.fixture
def write_checkpoint_file(tmp_path):
    def _write(hashlines, filename='checkpoints.json'):
        path = tmp_path / filename
        if isinstance(hashlines, str):
            path.write_text(hashlines)
        else:
            path.write_text(json.dumps({'hashlines': hashlines}))
        return path
    return _write
