from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir
from nordnet_client.config_types import DEFAULT_BASE_URL, DEFAULT_LANGUAGE, DEFAULT_TIMEOUT_MS, SUPPORTED_LANGUAGES

from . import console

APP_NAME = "nordnet"
CONFIG_FILENAME = "config.toml"
ENV_BASE_URL = "NORDNET_BASE_URL"

_WARNED_BASE_URL_SCHEME = False


@dataclass
class AuthConfig:
    session_id: str = ""
    username: str = ""


@dataclass
class AppConfig:
    base_url: str = DEFAULT_BASE_URL
    language: str = DEFAULT_LANGUAGE
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    auth: AuthConfig = field(default_factory=AuthConfig)


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(
        base_url=DEFAULT_BASE_URL,
        language=DEFAULT_LANGUAGE,
        timeout_ms=DEFAULT_TIMEOUT_MS,
        auth=AuthConfig(),
    )


def normalize_base_url(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"

    normalized = f"{scheme}{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_BASE_URL_SCHEME
    if _WARNED_BASE_URL_SCHEME:
        return
    console.warn(f"base_url missing scheme, assuming {normalized}")
    _WARNED_BASE_URL_SCHEME = True


def normalize_language(raw: str | None) -> str:
    value = (raw or "").strip().lower()
    if value not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{raw}'. Use one of: {', '.join(SUPPORTED_LANGUAGES)}")
    return value


def resolve_base_url(cfg: AppConfig) -> str:
    env_value = os.getenv(ENV_BASE_URL, "").strip()
    if env_value:
        return normalize_base_url(env_value)
    return cfg.base_url or DEFAULT_BASE_URL


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "base_url": cfg.base_url,
        "language": cfg.language,
        "timeout_ms": int(cfg.timeout_ms),
        "auth": {
            "session_id": cfg.auth.session_id,
            "username": cfg.auth.username,
        },
    }


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    base_url = normalize_base_url(str(data.get("base_url") or ""), warn=True)
    if base_url:
        cfg.base_url = base_url
    language = str(data.get("language") or "").strip().lower()
    if language in SUPPORTED_LANGUAGES:
        cfg.language = language
    timeout_ms = data.get("timeout_ms")
    if isinstance(timeout_ms, int) and not isinstance(timeout_ms, bool) and timeout_ms >= 0:
        cfg.timeout_ms = timeout_ms
    auth_raw = data.get("auth") or {}
    if isinstance(auth_raw, dict):
        cfg.auth = AuthConfig(
            session_id=str(auth_raw.get("session_id") or ""),
            username=str(auth_raw.get("username") or ""),
        )
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    # Holds the session key.
    os.chmod(path, 0o600)
    return path
