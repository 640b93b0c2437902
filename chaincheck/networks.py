import enum
from typing import (
    NamedTuple,
    Tuple,
)

from chaincheck.defaults.mainnet import (
    MAINNET_CHECKPOINTS,
)
from chaincheck.exceptions import (
    UnknownNetworkProfile,
)
from chaincheck.typing import (
    RawCheckpoints,
)


class NetworkProfile(enum.Enum):
    MAINNET = 'mainnet'
    TESTNET = 'testnet'
    STAGENET = 'stagenet'
    FAKECHAIN = 'fakechain'

    @classmethod
    def from_name(cls, name: str) -> 'NetworkProfile':
        try:
            return cls(name.lower())
        except ValueError:
            raise UnknownNetworkProfile(f"Unknown network: {name!r}")


class NetworkConfiguration(NamedTuple):

    profile: NetworkProfile
    name: str
    embedded_checkpoints: RawCheckpoints
    dns_domains: Tuple[str, ...]


MAINNET_CHECKPOINT_DOMAINS = (
    "evolution-project.go.ro/checkpoints",
)


# Test and stage networks establish trust without pinned history.
PRECONFIGURED_NETWORKS = {
    NetworkProfile.MAINNET: NetworkConfiguration(
        NetworkProfile.MAINNET,
        'Mainnet',
        MAINNET_CHECKPOINTS,
        MAINNET_CHECKPOINT_DOMAINS,
    ),
    NetworkProfile.TESTNET: NetworkConfiguration(
        NetworkProfile.TESTNET,
        'Testnet',
        (),
        (),
    ),
    NetworkProfile.STAGENET: NetworkConfiguration(
        NetworkProfile.STAGENET,
        'Stagenet',
        (),
        (),
    ),
    # the fake chain used by tests runs with mainnet parameters
    NetworkProfile.FAKECHAIN: NetworkConfiguration(
        NetworkProfile.FAKECHAIN,
        'Fakechain',
        MAINNET_CHECKPOINTS,
        MAINNET_CHECKPOINT_DOMAINS,
    ),
}


def get_network_configuration(profile: NetworkProfile) -> NetworkConfiguration:
    try:
        return PRECONFIGURED_NETWORKS[profile]
    except KeyError:
        raise UnknownNetworkProfile(f"Unknown or unsupported network profile: {profile!r}")
