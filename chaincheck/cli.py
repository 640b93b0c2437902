import argparse
import logging
from typing import (
    Any,
    Optional,
    Tuple,
)

from eth_typing import (
    Hash32,
)
from eth_utils import (
    ValidationError,
)
from eth_utils.logging import (
    DEBUG2_LEVEL_NUM,
)

from chaincheck import __version__
from chaincheck._utils.hashes import (
    decode_checkpoint_hash,
)
from chaincheck.constants import (
    DNS_TIMEOUT_SECONDS,
)
from chaincheck.exceptions import (
    UnknownNetworkProfile,
)
from chaincheck.networks import (
    NetworkProfile,
)
from chaincheck.validation import (
    validate_checkpoint_height,
)


LOG_LEVEL_CHOICES = {
    'DEBUG2': DEBUG2_LEVEL_NUM,
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARN': logging.WARNING,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}
LOG_LEVEL_CHOICES.update({str(level): level for level in set(LOG_LEVEL_CHOICES.values())})

LOG_LEVEL_HELP = (
    "LEVEL is one of "
    f"{'/'.join(sorted(LOG_LEVEL_CHOICES, key=LOG_LEVEL_CHOICES.__getitem__))}, "
    "case-insensitive. Use NAME=LEVEL to set the level of the logger NAME only."
)


def parse_log_level(value: str) -> Tuple[Optional[str], int]:
    """
    Parse ``LEVEL`` into ``(None, level)`` and ``NAME=LEVEL`` into ``(NAME, level)``.

    :raises ValueError: if the level is unknown or the name is empty
    """
    if value.upper() in LOG_LEVEL_CHOICES:
        return None, LOG_LEVEL_CHOICES[value.upper()]

    name, separator, raw_level = value.partition('=')
    if not separator or not name:
        raise ValueError(f"invalid logging config {value!r}")
    try:
        return name, LOG_LEVEL_CHOICES[raw_level.upper()]
    except KeyError:
        raise ValueError(f"unknown logging level {raw_level!r}")


class ValidateAndStoreLogLevel(argparse.Action):
    """
    Collect ``--log-level`` options into a ``{logger name or None: level}`` dict.
    """
    def __call__(self,
                 parser: argparse.ArgumentParser,
                 namespace: argparse.Namespace,
                 value: Any,
                 option_string: str=None) -> None:
        try:
            name, log_level = parse_log_level(value)
        except ValueError as err:
            raise argparse.ArgumentError(self, f"{err}. {LOG_LEVEL_HELP}")

        log_levels = getattr(namespace, self.dest) or {}
        if name in log_levels:
            target = 'the global log level' if name is None else f"logger '{name}'"
            raise argparse.ArgumentError(self, f"{target} may only be configured once")

        log_levels[name] = log_level
        setattr(namespace, self.dest, log_levels)


class NormalizeNetworkProfile(argparse.Action):
    def __call__(self,
                 parser: argparse.ArgumentParser,
                 namespace: argparse.Namespace,
                 value: Any,
                 option_string: str=None) -> None:
        try:
            profile = NetworkProfile.from_name(value)
        except UnknownNetworkProfile as err:
            raise argparse.ArgumentError(self, str(err))
        setattr(namespace, self.dest, profile)


def checkpoint_height(value: str) -> int:
    try:
        height = int(value)
        validate_checkpoint_height(height)
    except (ValueError, ValidationError) as err:
        raise argparse.ArgumentTypeError(f"invalid block height {value!r}: {err}")
    return height


def checkpoint_hash(value: str) -> Hash32:
    try:
        return decode_checkpoint_hash(value)
    except ValidationError as err:
        raise argparse.ArgumentTypeError(str(err))


def positive_float(value: str) -> float:
    try:
        result = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if result <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return result


parser = argparse.ArgumentParser(
    prog='chaincheck',
    description='Load and query the checkpoints pinned for a network',
)

#
# subparser for sub commands
#
subparser = parser.add_subparsers(dest='subcommand')

#
# Argument Groups
#
checkpoint_parser = parser.add_argument_group('checkpoints')
logging_parser = parser.add_argument_group('logging')


#
# Global
#
parser.add_argument(
    '--version',
    action='version',
    version=__version__,
)

#
# Logging configuration
#
logging_parser.add_argument(
    '-l',
    '--log-level',
    action=ValidateAndStoreLogLevel,
    dest="log_levels",
    metavar="LEVEL",
    help=(
        "Configure the logging level. " + LOG_LEVEL_HELP
    ),
)

#
# Checkpoint sources
#
checkpoint_parser.add_argument(
    '--network',
    action=NormalizeNetworkProfile,
    default=NetworkProfile.MAINNET,
    help=(
        "Network whose checkpoints are loaded: "
        f"{', '.join(profile.value for profile in NetworkProfile)} (default: mainnet)"
    ),
)

checkpoint_file_parser = checkpoint_parser.add_mutually_exclusive_group()
checkpoint_file_parser.add_argument(
    '--checkpoint-file',
    help="Path of the JSON checkpoint file",
)
checkpoint_file_parser.add_argument(
    '--data-dir',
    default=None,
    help="Directory holding checkpoints.json (default: current directory)",
)

checkpoint_parser.add_argument(
    '--enable-dns',
    action='store_true',
    help="Also load checkpoints published as DNS TXT records",
)
checkpoint_parser.add_argument(
    '--dns-timeout',
    type=positive_float,
    default=DNS_TIMEOUT_SECONDS,
    help=f"Timeout in seconds for DNS queries (default: {DNS_TIMEOUT_SECONDS})",
)


#
# Commands
#
show_parser = subparser.add_parser(
    'show',
    help='Print every checkpoint as "<height> <hash>"',
)
show_parser.set_defaults(command='show')

verify_parser = subparser.add_parser(
    'verify',
    help='Check a block hash against the checkpoint at its height',
)
verify_parser.add_argument('height', type=checkpoint_height)
verify_parser.add_argument('block_hash', type=checkpoint_hash, metavar='hash')
verify_parser.set_defaults(command='verify')

fork_parser = subparser.add_parser(
    'fork-allowed',
    help='Check whether a chain forking at FORK may replace the chain at CURRENT',
)
fork_parser.add_argument('current_height', type=checkpoint_height, metavar='current')
fork_parser.add_argument('fork_height', type=checkpoint_height, metavar='fork')
fork_parser.set_defaults(command='fork-allowed')
