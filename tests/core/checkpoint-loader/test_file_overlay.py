import pytest

from chaincheck.exceptions import (
    ConflictingCheckpoint,
    MalformedHash,
    ResourceCorrupt,
)


def test_missing_file_is_a_noop(loader, store, tmp_path):
    assert loader.load_from_file(tmp_path / 'nope.json') == 0
    assert store.is_empty


def test_file_into_empty_store(loader, store, make_hash, make_hex_hash, write_checkpoint_file):
    path = write_checkpoint_file([
        {'height': 0, 'hash': make_hex_hash(0)},
        {'height': 10, 'hash': make_hex_hash(10)},
    ])

    assert loader.load_from_file(path) == 2
    assert store.lookup(0) == make_hash(0)
    assert store.lookup(10) == make_hash(10)


def test_records_at_or_below_boundary_are_skipped(
        loader, populated_store, make_hash, make_hex_hash, write_checkpoint_file):
    loader.store = populated_store
    before = dict(populated_store.get_points())
    path = write_checkpoint_file([
        # would conflict if it were applied
        {'height': 100, 'hash': make_hex_hash(1)},
        {'height': 150, 'hash': make_hex_hash(150)},
        {'height': 300, 'hash': make_hex_hash(2)},
    ])

    assert loader.load_from_file(path) == 0
    assert dict(populated_store.get_points()) == before


def test_records_above_boundary_are_added(
        loader, populated_store, make_hash, make_hex_hash, write_checkpoint_file):
    loader.store = populated_store
    path = write_checkpoint_file([
        {'height': 250, 'hash': make_hex_hash(250)},
        {'height': 400, 'hash': make_hex_hash(400)},
        {'height': 350, 'hash': make_hex_hash(350)},
    ])

    assert loader.load_from_file(path) == 2
    assert list(populated_store) == [100, 200, 300, 350, 400]


def test_boundary_is_fixed_at_start_of_phase(loader, store, make_hex_hash, write_checkpoint_file):
    path = write_checkpoint_file([
        {'height': 500, 'hash': make_hex_hash(500)},
        {'height': 400, 'hash': make_hex_hash(400)},
    ])

    assert loader.load_from_file(path) == 2
    assert list(store) == [400, 500]


def test_malformed_hash_above_boundary_fails_phase(
        loader, populated_store, make_hex_hash, write_checkpoint_file):
    loader.store = populated_store
    path = write_checkpoint_file([
        {'height': 400, 'hash': make_hex_hash(400)},
        {'height': 500, 'hash': 'not-a-hash'},
        {'height': 600, 'hash': make_hex_hash(600)},
    ])

    with pytest.raises(MalformedHash):
        loader.load_from_file(path)

    # records consumed before the failure stay
    assert list(populated_store) == [100, 200, 300, 400]


def test_malformed_hash_below_boundary_is_skipped(
        loader, populated_store, make_hex_hash, write_checkpoint_file):
    loader.store = populated_store
    path = write_checkpoint_file([
        {'height': 200, 'hash': 'not-a-hash'},
        {'height': 400, 'hash': make_hex_hash(400)},
    ])

    assert loader.load_from_file(path) == 1


def test_conflict_within_file_fails_phase(loader, store, make_hex_hash, write_checkpoint_file):
    path = write_checkpoint_file([
        {'height': 400, 'hash': make_hex_hash(400)},
        {'height': 400, 'hash': make_hex_hash(1)},
    ])

    with pytest.raises(ConflictingCheckpoint):
        loader.load_from_file(path)


@pytest.mark.parametrize(
    'contents',
    (
        '',
        '{',
        '[]',
        '{"hashlines": {}}',
        '{"checkpoints": []}',
    ),
)
def test_corrupt_file_fails_phase(loader, store, write_checkpoint_file, contents):
    path = write_checkpoint_file(contents)

    with pytest.raises(ResourceCorrupt) as excinfo:
        loader.load_from_file(path)

    assert excinfo.value.path == path
    assert store.is_empty
