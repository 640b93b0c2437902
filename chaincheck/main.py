import argparse
import logging
import sys
from typing import (
    Sequence,
)

from eth_utils import (
    ValidationError,
)

from chaincheck._utils.hashes import (
    encode_checkpoint_hash,
)
from chaincheck._utils.logging import (
    set_logger_levels,
    setup_stderr_logging,
)
from chaincheck.cli import (
    parser,
)
from chaincheck.config import (
    CheckpointConfig,
)
from chaincheck.exceptions import (
    ChainCheckError,
)
from chaincheck.loader import (
    load_checkpoints,
)
from chaincheck.store import (
    CheckpointStore,
    CheckpointVerdict,
)

VERDICT_OUTPUT = {
    CheckpointVerdict.ACCEPT: 'accept',
    CheckpointVerdict.REJECT: 'reject',
    CheckpointVerdict.NOT_CHECKPOINTED: 'not-checkpointed',
}


def setup_logging(args: argparse.Namespace) -> None:
    log_levels = dict(args.log_levels or {})
    stderr_level = log_levels.get(None, logging.INFO)

    handler = setup_stderr_logging(min(stderr_level, *log_levels.values()))
    logging.getLogger().setLevel(stderr_level)
    set_logger_levels(log_levels, handler)


def show_checkpoints(store: CheckpointStore) -> int:
    for entry in store.entries():
        print(entry.height, encode_checkpoint_hash(entry.block_hash))
    return 0


def verify_checkpoint(store: CheckpointStore, args: argparse.Namespace) -> int:
    verdict = store.verify_block(args.height, args.block_hash)
    print(VERDICT_OUTPUT[verdict])
    return 1 if verdict is CheckpointVerdict.REJECT else 0


def check_fork(store: CheckpointStore, args: argparse.Namespace) -> int:
    if store.is_alternative_chain_allowed(args.current_height, args.fork_height):
        print('allowed')
        return 0
    else:
        print('forbidden')
        return 1


def main(argv: Sequence[str] = None) -> int:
    args = parser.parse_args(argv)
    if args.subcommand is None:
        parser.print_help()
        return 2

    setup_logging(args)
    logger = logging.getLogger('chaincheck')

    config = CheckpointConfig.from_cli_args(args)
    logger.debug("Loading checkpoints with %r", config)

    try:
        store = load_checkpoints(config)
    except (ChainCheckError, ValidationError) as err:
        logger.error("Failed to load checkpoints: %s", err)
        return 1

    if args.command == 'show':
        return show_checkpoints(store)
    elif args.command == 'verify':
        return verify_checkpoint(store, args)
    elif args.command == 'fork-allowed':
        return check_fork(store, args)
    else:
        raise Exception(f"Invariant: unknown command {args.command!r}")


def run() -> None:
    sys.exit(main())
