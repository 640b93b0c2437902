import pytest

from chaincheck.exceptions import (
    ResourceUnavailable,
)
from chaincheck.loader import (
    CheckpointLoader,
)
from chaincheck.sources import (
    DnsRecordSource,
)


class FakeDnsRecordSource(DnsRecordSource):
    def __init__(self, records=(), unavailable=False):
        self.records = tuple(records)
        self.unavailable = unavailable
        self.queried_domains = []

    def resolve_txt(self, domains):
        self.queried_domains.append(tuple(domains))
        if self.unavailable:
            raise ResourceUnavailable("no answers")
        return self.records


@pytest.fixture
def dns_source():
    return FakeDnsRecordSource()


@pytest.fixture
def loader(store, dns_source):
    return CheckpointLoader(store, dns_source=dns_source)
