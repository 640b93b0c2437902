import logging
from logging import (
    StreamHandler,
)
import sys
from typing import (
    Dict,
    Optional,
)


class ChainCheckLogFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        record.shortname = record.name.split('.')[-1]  # type: ignore
        return super().format(record)


LOG_FORMATTER = ChainCheckLogFormatter(
    fmt='%(levelname)8s  %(asctime)s  %(shortname)20s  %(message)s',
)


def setup_stderr_logging(level: int = None) -> StreamHandler:
    if level is None:
        level = logging.INFO
    logger = logging.getLogger()

    handler_stream = logging.StreamHandler(sys.stderr)
    handler_stream.setLevel(level)
    handler_stream.setFormatter(LOG_FORMATTER)

    logger.addHandler(handler_stream)

    return handler_stream


def set_logger_levels(log_levels: Dict[Optional[str], int],
                      *handlers: logging.Handler) -> None:
    for name, level in log_levels.items():

        # The root logger is configured separately
        if name is None:
            continue

        logger = logging.getLogger(name)
        logger.propagate = False
        logger.setLevel(level)

        for handler in handlers:
            logger.addHandler(handler)
