from abc import (
    ABC,
    abstractmethod,
)
import json
import logging
from pathlib import (
    Path,
)
from typing import (
    Any,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

import dns.exception
import dns.resolver
from eth_utils import (
    to_tuple,
)
from eth_utils.toolz import (
    unique,
)

from chaincheck.constants import (
    CHECKPOINT_FILE_COLLECTION_KEY,
    DNS_TIMEOUT_SECONDS,
    UINT_64_MAX,
)
from chaincheck.exceptions import (
    ResourceCorrupt,
    ResourceUnavailable,
)
from chaincheck.typing import (
    CheckpointRecord,
)


class FileRecordSource(ABC):
    """
    Reads the checkpoint records stored in a local file.
    """

    @abstractmethod
    def read_records(self, path: Union[str, Path]) -> Optional[Tuple[CheckpointRecord, ...]]:
        """
        Return the records in file order, or ``None`` if there is no file at ``path``.

        :raises ResourceCorrupt: if the file exists but cannot be parsed
        """
        ...


class DnsRecordSource(ABC):
    """
    Resolves the TXT records published for a set of domains.
    """

    @abstractmethod
    def resolve_txt(self, domains: Sequence[str]) -> Tuple[str, ...]:
        """
        Return the union of the TXT records of all ``domains``.

        :raises ResourceUnavailable: if none of the domains could be resolved
        """
        ...


@to_tuple
def _parse_hashlines(raw: Any, path: Path) -> Iterable[CheckpointRecord]:
    if not isinstance(raw, dict) or CHECKPOINT_FILE_COLLECTION_KEY not in raw:
        raise ResourceCorrupt(
            f"Checkpoint file {path} must be an object with a "
            f"'{CHECKPOINT_FILE_COLLECTION_KEY}' field",
            path,
        )

    hashlines = raw[CHECKPOINT_FILE_COLLECTION_KEY]
    if not isinstance(hashlines, list):
        raise ResourceCorrupt(
            f"'{CHECKPOINT_FILE_COLLECTION_KEY}' in {path} must be a list, got {type(hashlines)}",
            path,
        )

    for index, hashline in enumerate(hashlines):
        if not isinstance(hashline, dict):
            raise ResourceCorrupt(f"Entry #{index} in {path} is not an object", path)

        height = hashline.get('height')
        block_hash = hashline.get('hash')

        # bool is a subclass of int
        if not isinstance(height, int) or isinstance(height, bool):
            raise ResourceCorrupt(
                f"Entry #{index} in {path} has an invalid height: {height!r}",
                path,
            )
        if not 0 <= height <= UINT_64_MAX:
            raise ResourceCorrupt(
                f"Entry #{index} in {path} has an invalid height: {height!r}",
                path,
            )
        if not isinstance(block_hash, str):
            raise ResourceCorrupt(
                f"Entry #{index} in {path} has an invalid hash: {block_hash!r}",
                path,
            )

        yield CheckpointRecord(height, block_hash)


class JsonFileRecordSource(FileRecordSource):
    """
    Reads a JSON document of the form::

        {"hashlines": [{"height": 1000, "hash": "<64 hex characters>"}, ...]}
    """
    logger = logging.getLogger('chaincheck.sources.JsonFileRecordSource')

    def read_records(self, path: Union[str, Path]) -> Optional[Tuple[CheckpointRecord, ...]]:
        path = Path(path)
        if not path.exists():
            return None

        try:
            with path.open('r') as checkpoint_file:
                raw = json.load(checkpoint_file)
        except (OSError, UnicodeDecodeError, ValueError) as err:
            raise ResourceCorrupt(f"Error loading checkpoints from {path}: {err}", path) from err

        records = _parse_hashlines(raw, path)
        self.logger.debug("Read %d checkpoint records from %s", len(records), path)
        return records


class DnsPythonRecordSource(DnsRecordSource):
    """
    Resolves TXT records with ``dnspython``. Every query is bounded by ``timeout`` seconds.
    """
    logger = logging.getLogger('chaincheck.sources.DnsPythonRecordSource')

    def __init__(self,
                 timeout: float=DNS_TIMEOUT_SECONDS,
                 resolver: dns.resolver.Resolver=None) -> None:
        self.timeout = timeout
        self._resolver = resolver

    def _get_resolver(self) -> dns.resolver.Resolver:
        if self._resolver is None:
            self._resolver = dns.resolver.Resolver()
        self._resolver.lifetime = self.timeout
        return self._resolver

    def resolve_txt(self, domains: Sequence[str]) -> Tuple[str, ...]:
        if not domains:
            return ()

        try:
            resolver = self._get_resolver()
        except dns.exception.DNSException as err:
            raise ResourceUnavailable(f"No DNS resolver available: {err}") from err

        records: List[str] = []
        resolved_domains = 0
        for domain in domains:
            try:
                answer = resolver.resolve(domain, 'TXT')
            except dns.exception.DNSException as err:
                self.logger.debug("Failed to resolve TXT records for %s: %s", domain, err)
                continue

            resolved_domains += 1
            for rdata in answer:
                records.append(b''.join(rdata.strings).decode('ascii', errors='replace'))

        if not resolved_domains:
            raise ResourceUnavailable(f"None of {len(domains)} checkpoint domains resolved")

        return tuple(unique(records))
