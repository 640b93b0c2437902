import argparse
from pathlib import (
    Path,
)
from typing import (
    Union,
)

from eth_utils import (
    ValidationError,
)

from chaincheck.constants import (
    CHECKPOINT_FILENAME,
    DNS_TIMEOUT_SECONDS,
)
from chaincheck.networks import (
    NetworkProfile,
)


class CheckpointConfig:
    """
    Where a node takes its checkpoints from.
    """
    def __init__(self,
                 checkpoint_file: Union[str, Path],
                 network: NetworkProfile=NetworkProfile.MAINNET,
                 enable_dns: bool=False,
                 dns_timeout: float=DNS_TIMEOUT_SECONDS) -> None:
        if not isinstance(network, NetworkProfile):
            raise ValidationError(f"network must be a NetworkProfile, got {network!r}")
        if dns_timeout <= 0:
            raise ValidationError(f"DNS timeout must be positive, got {dns_timeout}")

        self.checkpoint_file = Path(checkpoint_file)
        self.network = network
        self.enable_dns = enable_dns
        self.dns_timeout = dns_timeout

    @classmethod
    def from_data_dir(cls,
                      data_dir: Union[str, Path],
                      network: NetworkProfile=NetworkProfile.MAINNET,
                      enable_dns: bool=False,
                      dns_timeout: float=DNS_TIMEOUT_SECONDS) -> 'CheckpointConfig':
        return cls(
            Path(data_dir) / CHECKPOINT_FILENAME,
            network=network,
            enable_dns=enable_dns,
            dns_timeout=dns_timeout,
        )

    @classmethod
    def from_cli_args(cls, args: argparse.Namespace) -> 'CheckpointConfig':
        if args.checkpoint_file is not None:
            checkpoint_file = args.checkpoint_file
        elif args.data_dir is not None:
            checkpoint_file = Path(args.data_dir) / CHECKPOINT_FILENAME
        else:
            checkpoint_file = Path('.') / CHECKPOINT_FILENAME

        return cls(
            checkpoint_file,
            network=args.network,
            enable_dns=args.enable_dns,
            dns_timeout=args.dns_timeout,
        )

    def __repr__(self) -> str:
        return (
            f"CheckpointConfig(checkpoint_file={str(self.checkpoint_file)!r}, "
            f"network={self.network.value}, enable_dns={self.enable_dns}, "
            f"dns_timeout={self.dns_timeout})"
        )
