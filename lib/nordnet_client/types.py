from __future__ import annotations

from typing import Literal, NotRequired, TypedDict

Side = Literal["BUY", "SELL"]
OrderTypeCode = Literal["FAK", "FOK", "NORMAL", "LIMIT", "STOP_LIMIT", "STOP_TRAILING", "OCO"]
OrderState = Literal["DELETED", "LOCAL", "ON_MARKET", "LOCKED"]
InstrumentLookupType = Literal["isin", "symbol"]
DerivativeType = Literal["bull_bear", "certificate", "minifuture", "option", "warrant", "turbo"]
EntityType = str


class ErrorResponse(TypedDict, total=False):
    message: str
    code: str
    details: object


class Status(TypedDict):
    system_open: bool
    timestamp: int
    valid_version: bool


class LoggedInStatus(TypedDict):
    logged_in: bool


class ChallengeResponse(TypedDict):
    challenge_method: str
    challenge_type: str
    challenge_value: NotRequired[str]
    session_key: str


class Feed(TypedDict):
    hostname: str
    port: int
    public_feed: bool
    secure: bool


class LoginResponse(TypedDict):
    country: str
    environment: str
    logged_in: bool
    public_feed: Feed
    private_feed: NotRequired[Feed]
    session_key: str


class Amount(TypedDict):
    value: float
    currency: str


class Account(TypedDict):
    accid: int
    accno: str
    type: str
    is_default: bool
    is_blocked: bool
    alias: NotRequired[str]


class OrderReply(TypedDict):
    order_id: int
    result_code: str
    order_state: NotRequired[OrderState]
    message: NotRequired[str]


class OrderEntryRequest(TypedDict):
    market_id: int
    side: Side
    volume: int
    identifier: NotRequired[str]
    price: NotRequired[float]
    currency: NotRequired[str]
    order_type: NotRequired[OrderTypeCode]
    valid_until: NotRequired[str]
    open_volume: NotRequired[int]
    activation_condition: NotRequired[str]
    trigger_value: NotRequired[float]
    trigger_condition: NotRequired[str]
    target_value: NotRequired[float]
    reference: NotRequired[str]


class OrderModifyRequest(TypedDict, total=False):
    price: float
    volume: int
    open_volume: int
    currency: str


class Country(TypedDict):
    country: str
    name: str
