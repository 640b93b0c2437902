import pytest

from chaincheck.defaults.mainnet import (
    MAINNET_CHECKPOINTS,
)
from chaincheck.exceptions import (
    UnknownNetworkProfile,
)
from chaincheck.networks import (
    NetworkProfile,
    get_network_configuration,
)


@pytest.mark.parametrize(
    'name, expected',
    (
        ('mainnet', NetworkProfile.MAINNET),
        ('MAINNET', NetworkProfile.MAINNET),
        ('Testnet', NetworkProfile.TESTNET),
        ('stagenet', NetworkProfile.STAGENET),
        ('fakechain', NetworkProfile.FAKECHAIN),
    ),
)
def test_profile_from_name(name, expected):
    assert NetworkProfile.from_name(name) is expected


@pytest.mark.parametrize('name', ('', 'ropsten', 'main'))
def test_unknown_profile_name(name):
    with pytest.raises(UnknownNetworkProfile):
        NetworkProfile.from_name(name)


@pytest.mark.parametrize('profile', tuple(NetworkProfile))
def test_every_profile_is_configured(profile):
    assert get_network_configuration(profile).profile is profile


def test_unknown_profile_configuration():
    with pytest.raises(UnknownNetworkProfile):
        get_network_configuration('mainnet')


def test_fakechain_shares_mainnet_sources():
    mainnet = get_network_configuration(NetworkProfile.MAINNET)
    fakechain = get_network_configuration(NetworkProfile.FAKECHAIN)

    assert fakechain.embedded_checkpoints == mainnet.embedded_checkpoints == MAINNET_CHECKPOINTS
    assert fakechain.dns_domains == mainnet.dns_domains


@pytest.mark.parametrize('profile', (NetworkProfile.TESTNET, NetworkProfile.STAGENET))
def test_test_networks_have_no_sources(profile):
    network = get_network_configuration(profile)
    assert network.embedded_checkpoints == ()
    assert network.dns_domains == ()
