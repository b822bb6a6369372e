from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    NETWORK = "network"
    BAD_REQUEST = "bad_request"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    SERVICE_UNAVAILABLE = "service_unavailable"
    API = "api"
    DECODE = "decode"


_STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.AUTHENTICATION,
    403: ErrorKind.AUTHORIZATION,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMIT,
    503: ErrorKind.SERVICE_UNAVAILABLE,
}

_RETRY_AFTER_KINDS = {ErrorKind.RATE_LIMIT, ErrorKind.SERVICE_UNAVAILABLE}


@dataclass(eq=False)
class NordnetError(Exception):
    """Every failure raised by the client.

    Callers branch on ``kind``; the optional fields are only set for the
    kinds that carry them (``retry_after`` for rate limit and service
    unavailable, ``status_code`` for anything that got an HTTP response).
    """

    kind: ErrorKind
    message: str
    status_code: int | None = None
    code: str | None = None
    body: Any = None
    retry_after: int | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    @property
    def is_retryable(self) -> bool:
        return self.kind in _RETRY_AFTER_KINDS

    @classmethod
    def configuration(cls, message: str) -> NordnetError:
        return cls(ErrorKind.CONFIGURATION, message)

    @classmethod
    def network(cls, message: str) -> NordnetError:
        return cls(ErrorKind.NETWORK, message)


def kind_for_status(status_code: int) -> ErrorKind:
    return _STATUS_KINDS.get(status_code, ErrorKind.API)


def error_for_status(
        status_code: int,
        message: str,
        *,
        code: str | None = None,
        body: Any = None,
        retry_after: int | None = None,
) -> NordnetError:
    kind = kind_for_status(status_code)
    return NordnetError(
        kind,
        message,
        status_code=status_code,
        code=code,
        body=body,
        retry_after=retry_after if kind in _RETRY_AFTER_KINDS else None,
    )
