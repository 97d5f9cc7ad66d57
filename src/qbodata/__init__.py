from importlib.metadata import PackageNotFoundError, version  # pragma: no cover

try:
    dist_name = "qbodata"
    __version__ = version(dist_name)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError

from .api import DataService  # noqa: E402
from .cdc import flatten_cdc  # noqa: E402
from .config import Credentials, QBConfig  # noqa: E402
from .data import Entity, QueryResponse  # noqa: E402
from .exceptions import (  # noqa: E402
    Error,
    ErrorKind,
    FaultException,
    MalformedResponseError,
    MissingCredentialsError,
    QuickbooksError,
    TransportError,
    ValidationError,
)
from .faults import map_fault  # noqa: E402

__all__ = [
    "Credentials",
    "DataService",
    "Entity",
    "Error",
    "ErrorKind",
    "FaultException",
    "MalformedResponseError",
    "MissingCredentialsError",
    "QBConfig",
    "QueryResponse",
    "QuickbooksError",
    "TransportError",
    "ValidationError",
    "flatten_cdc",
    "map_fault",
]
