from .client import NordnetClient
from .config_types import ClientConfig, RequestOptions
from .errors import ErrorKind, NordnetError

__all__ = ["NordnetClient", "ClientConfig", "RequestOptions", "ErrorKind", "NordnetError"]
