from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

_RETRY_AFTER_RE = re.compile(r"\s*([+-]?\d+)")


class BodyStage(str, Enum):
    JSON = "json"
    TEXT = "text"
    GENERIC = "generic"


@dataclass(frozen=True)
class ErrorEnvelope:
    message: str
    stage: BodyStage
    code: str | None = None
    details: Any = None
    body: Any = None


def generic_message(status_code: int) -> str:
    return f"Request failed with status {status_code}"


def try_json(content: bytes) -> tuple[bool, Any]:
    if not content:
        return False, None
    try:
        return True, json.loads(content)
    except ValueError:
        return False, None


def try_text(content: bytes, encoding: str | None = None) -> tuple[bool, str]:
    if not content:
        return False, ""
    try:
        text = content.decode(encoding or "utf-8")
    except (LookupError, UnicodeDecodeError):
        return False, ""
    return bool(text), text


def parse_error_envelope(status_code: int, content: bytes, encoding: str | None = None) -> ErrorEnvelope:
    """Resolve a failed response body: JSON first, then raw text, then a generic message.

    A JSON body that decodes but has no usable ``message`` keeps the generic
    message; text is only consulted when JSON decoding fails.
    """
    fallback = generic_message(status_code)

    ok, data = try_json(content)
    if ok:
        message = fallback
        code = None
        details = None
        if isinstance(data, dict):
            if data.get("message"):
                message = str(data["message"])
            if data.get("code") is not None:
                code = str(data["code"])
            details = data.get("details")
        return ErrorEnvelope(message=message, stage=BodyStage.JSON, code=code, details=details, body=data)

    ok, text = try_text(content, encoding)
    if ok:
        return ErrorEnvelope(message=text, stage=BodyStage.TEXT, body=text)

    return ErrorEnvelope(message=fallback, stage=BodyStage.GENERIC)


def parse_retry_after(value: str | None) -> int | None:
    if not value:
        return None
    m = _RETRY_AFTER_RE.match(value)
    if not m:
        return None
    return int(m.group(1))
