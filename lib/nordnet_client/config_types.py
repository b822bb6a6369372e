from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping, get_args

from .errors import NordnetError

Language = Literal["da", "de", "en", "fi", "nb", "nn", "no", "sv"]

SUPPORTED_LANGUAGES: tuple[str, ...] = get_args(Language)
DEFAULT_BASE_URL = "https://public.nordnet.se/api/2"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_LANGUAGE: Language = "en"


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: float = DEFAULT_TIMEOUT_MS
    language: Language = DEFAULT_LANGUAGE
    headers: Mapping[str, str] = field(default_factory=dict)
    debug: bool = False
    session_id: str | None = None


@dataclass
class RequestOptions:
    params: Mapping[str, object] | None = None
    headers: Mapping[str, str] | None = None
    timeout_ms: float | None = None


def validate_config(cfg: ClientConfig) -> ClientConfig:
    if cfg.timeout_ms is not None and cfg.timeout_ms < 0:
        raise NordnetError.configuration("Timeout must be a positive number")
    if cfg.language and cfg.language not in SUPPORTED_LANGUAGES:
        raise NordnetError.configuration(
            f"Unsupported language '{cfg.language}'. Expected one of: {', '.join(SUPPORTED_LANGUAGES)}"
        )
    return cfg
