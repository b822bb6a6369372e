from __future__ import annotations

from collections.abc import Iterable


def join_ids(ids: int | str | Iterable[int | str]) -> str:
    if isinstance(ids, (int, str)):
        return str(ids)
    return ",".join(str(i) for i in ids)


def flag_params(**flags: object) -> dict[str, object]:
    """Drop flags the caller did not set so they are not sent at all."""
    return {k: v for k, v in flags.items() if v is not None}
