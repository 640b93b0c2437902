from importlib.metadata import (
    version as __version,
)

from chaincheck.loader import (
    CheckpointLoader,
    load_checkpoints,
)
from chaincheck.networks import (
    NetworkProfile,
)
from chaincheck.store import (
    CheckpointStore,
    CheckpointVerdict,
)


__version__ = __version("py-chaincheck")
