from pathlib import (
    Path,
)
from typing import (
    TYPE_CHECKING,
    Union,
)

from eth_typing import (
    BlockNumber,
)
from eth_utils import (
    ValidationError,
    get_extended_debug_logger,
)

from chaincheck._utils.hashes import (
    decode_checkpoint_hash,
)
from chaincheck.constants import (
    DNS_RECORD_SEPARATOR,
)
from chaincheck.exceptions import (
    ChainCheckError,
    EmptyStore,
    ResourceUnavailable,
)
from chaincheck.networks import (
    NetworkProfile,
    get_network_configuration,
)
from chaincheck.sources import (
    DnsPythonRecordSource,
    DnsRecordSource,
    FileRecordSource,
    JsonFileRecordSource,
)
from chaincheck.store import (
    CheckpointStore,
)
from chaincheck.typing import (
    CheckpointEntry,
)
from chaincheck.validation import (
    validate_checkpoint_height,
)

if TYPE_CHECKING:
    from chaincheck.config import CheckpointConfig  # noqa: F401


def parse_dns_checkpoint(record: str) -> CheckpointEntry:
    """
    Parse a ``<height>:<hash>`` TXT record.

    :raises ValidationError: if the record is not in that form
    """
    height_str, separator, hash_str = record.partition(DNS_RECORD_SEPARATOR)
    if not separator:
        raise ValidationError(f"Checkpoint record has no '{DNS_RECORD_SEPARATOR}': {record!r}")

    if not height_str.isascii() or not height_str.isdigit():
        raise ValidationError(f"Checkpoint record has an invalid height: {record!r}")
    height = int(height_str)
    validate_checkpoint_height(height)

    return CheckpointEntry(BlockNumber(height), decode_checkpoint_hash(hash_str))


class CheckpointLoader:
    """
    Populates a :class:`CheckpointStore` from, in order: the checkpoints compiled
    into the program, a local checkpoint file and, optionally, DNS.

    A checkpoint file that exists but can't be read, and any conflicting hash,
    is fatal. DNS is best effort: if nothing resolves, loading carries on.
    """
    logger = get_extended_debug_logger('chaincheck.loader.CheckpointLoader')

    def __init__(self,
                 store: CheckpointStore,
                 file_source: FileRecordSource=None,
                 dns_source: DnsRecordSource=None) -> None:
        if file_source is None:
            file_source = JsonFileRecordSource()
        if dns_source is None:
            dns_source = DnsPythonRecordSource()

        self.store = store
        self.file_source = file_source
        self.dns_source = dns_source

    def load_embedded_defaults(self, profile: NetworkProfile) -> int:
        network = get_network_configuration(profile)

        for height, hex_hash in network.embedded_checkpoints:
            try:
                self.store.insert_hex(height, hex_hash)
            except (ChainCheckError, ValidationError) as err:
                raise Exception(
                    f"Invariant: embedded {network.name} checkpoint at {height} is invalid"
                ) from err

        self.logger.debug(
            "Added %d embedded checkpoints for %s",
            len(network.embedded_checkpoints),
            network.name,
        )
        return len(network.embedded_checkpoints)

    def load_from_file(self, path: Union[str, Path]) -> int:
        """
        Add the checkpoints of the file at ``path`` that lie above the current
        highest checkpoint. Returns the number of checkpoints added.

        :raises ResourceCorrupt: if the file exists but can't be parsed
        :raises MalformedHash: if a record above the boundary has a bad hash
        :raises ConflictingCheckpoint: if a record conflicts with a known checkpoint
        """
        records = self.file_source.read_records(path)
        if records is None:
            self.logger.debug("Blockchain checkpoints file not found: %s", path)
            return 0

        try:
            boundary = self.store.max_height()
        except EmptyStore:
            boundary = None
        else:
            self.logger.debug("Max checkpoint height before %s is %d", path, boundary)

        added = 0
        for record in records:
            if boundary is not None and record.height <= boundary:
                self.logger.debug2("Ignoring checkpoint height %d from %s", record.height, path)
                continue

            self.logger.debug2("Adding checkpoint height %d, hash=%s", record.height, record.hash)
            self.store.insert_hex(record.height, record.hash)
            added += 1

        self.logger.info("Added %d checkpoints from %s", added, path)
        return added

    def load_from_dns(self, profile: NetworkProfile) -> int:
        """
        Add the checkpoints published over DNS for ``profile``. Malformed records
        are skipped and an unavailable resolver adds nothing. Returns the number
        of well-formed records applied.

        :raises ConflictingCheckpoint: if a well-formed record conflicts with a known checkpoint
        """
        network = get_network_configuration(profile)

        try:
            records = self.dns_source.resolve_txt(network.dns_domains)
        except ResourceUnavailable as err:
            self.logger.info("No checkpoints resolved over DNS for %s: %s", network.name, err)
            return 0

        if not records:
            self.logger.info("No checkpoints resolved over DNS for %s", network.name)
            return 0

        added = 0
        for record in records:
            try:
                entry = parse_dns_checkpoint(record)
            except ValidationError as err:
                self.logger.debug("Skipping DNS checkpoint record %r: %s", record, err)
                continue

            self.store.insert(entry.height, entry.block_hash)
            added += 1

        self.logger.info("Applied %d checkpoints from DNS for %s", added, network.name)
        return added

    def load(self,
             path: Union[str, Path],
             profile: NetworkProfile,
             enable_dns: bool=False) -> CheckpointStore:
        self.load_embedded_defaults(profile)
        self.load_from_file(path)
        if enable_dns:
            self.load_from_dns(profile)
        return self.store


def load_checkpoints(config: 'CheckpointConfig') -> CheckpointStore:
    """
    Build a fresh store and fill it from the sources described by ``config``.
    """
    loader = CheckpointLoader(
        CheckpointStore(),
        dns_source=DnsPythonRecordSource(timeout=config.dns_timeout),
    )
    return loader.load(config.checkpoint_file, config.network, config.enable_dns)
