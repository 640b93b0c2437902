import pytest

from chaincheck._utils.hashes import (
    decode_checkpoint_hash,
)
from chaincheck.defaults.mainnet import (
    MAINNET_CHECKPOINTS,
)
from chaincheck.networks import (
    NetworkProfile,
    NetworkConfiguration,
    PRECONFIGURED_NETWORKS,
)


def test_mainnet_table_is_strictly_ascending():
    heights = [height for height, _ in MAINNET_CHECKPOINTS]
    assert heights == sorted(set(heights))


@pytest.mark.parametrize('height, hex_hash', MAINNET_CHECKPOINTS)
def test_mainnet_table_hashes_decode(height, hex_hash):
    assert len(decode_checkpoint_hash(hex_hash)) == 32


@pytest.mark.parametrize('profile', (NetworkProfile.MAINNET, NetworkProfile.FAKECHAIN))
def test_mainnet_defaults_loaded(loader, store, profile):
    added = loader.load_embedded_defaults(profile)

    assert added == len(MAINNET_CHECKPOINTS)
    assert len(store) == len(MAINNET_CHECKPOINTS)
    assert store.max_height() == 1300
    assert store.lookup(0) == decode_checkpoint_hash(MAINNET_CHECKPOINTS[0][1])


@pytest.mark.parametrize('profile', (NetworkProfile.TESTNET, NetworkProfile.STAGENET))
def test_test_networks_have_no_defaults(loader, store, profile):
    assert loader.load_embedded_defaults(profile) == 0
    assert store.is_empty


def test_loading_defaults_twice_is_idempotent(loader, store):
    loader.load_embedded_defaults(NetworkProfile.MAINNET)
    loader.load_embedded_defaults(NetworkProfile.MAINNET)
    assert len(store) == len(MAINNET_CHECKPOINTS)


def test_broken_embedded_table_is_an_invariant_failure(loader, store, monkeypatch, make_hex_hash):
    broken = NetworkConfiguration(
        NetworkProfile.MAINNET,
        'Mainnet',
        ((10, make_hex_hash(1)), (10, make_hex_hash(2))),
        (),
    )
    monkeypatch.setitem(PRECONFIGURED_NETWORKS, NetworkProfile.MAINNET, broken)

    with pytest.raises(Exception, match="Invariant"):
        loader.load_embedded_defaults(NetworkProfile.MAINNET)
