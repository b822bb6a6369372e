from __future__ import annotations

from datetime import datetime, timezone


def format_timestamp_ms(value: int | float | None) -> str:
    if value is None:
        return "-"
    try:
        dt = datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return str(value)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def format_value(value) -> str:
    """Render plain numbers, {"price", "decimals"} and {"value", "currency"} payloads."""
    if value is None or value == "":
        return "-"
    if isinstance(value, dict):
        if "price" in value:
            decimals = value.get("decimals")
            if isinstance(decimals, int) and isinstance(value["price"], (int, float)):
                return f"{value['price']:.{decimals}f}"
            return str(value["price"])
        if "value" in value:
            currency = value.get("currency")
            return f"{value['value']} {currency}" if currency else str(value["value"])
    return str(value)


def tradable_label(tradable: dict | None) -> str:
    if not isinstance(tradable, dict):
        return "-"
    market_id = tradable.get("market_id")
    identifier = tradable.get("identifier")
    if market_id is None and identifier is None:
        return "-"
    return f"{market_id}:{identifier}"
