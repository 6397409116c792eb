"""Parameters and genesis state of the global fee module."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping

from xionfee.coins import DEC_PRECISION, DecCoin, validate_denom

MODULE_NAME = "globalfee"
STORE_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME

PARAM_STORE_KEY_MIN_GAS_PRICES = b"MinimumGasPricesParam"
PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES = b"BypassMinFeeMsgTypes"
PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE = b"MaxTotalBypassMinFeeMsgGasUsage"

MSG_TYPE_URL_PREFIX = "/"

# Filled in at runtime with the zero-valued staking bond denom.
DEFAULT_MIN_GAS_PRICES: tuple[DecCoin, ...] = ()

DEFAULT_BYPASS_MIN_FEE_MSG_TYPES: tuple[str, ...] = (
    "/xion.v1.MsgSend",
    "/xion.v1.MsgMultiSend",
    "/xion.jwk.v1.MsgDeleteAudience",
    "/xion.jwk.v1.MsgDeleteAudienceClaim",
    "/cosmos.authz.v1beta1.MsgRevoke",
    "/cosmos.feegrant.v1beta1.MsgRevokeAllowance",
)

# Gas that a transaction made only of bypass messages may use and still pay no fee.
DEFAULT_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE = 1_000_000

_UINT64_MAX = 2**64 - 1


def validate_minimum_gas_prices(value: Any) -> list[DecCoin]:
    """Check that ``value`` is a valid list of decimal coins and return it."""
    if not isinstance(value, (list, tuple)) or not all(isinstance(c, DecCoin) for c in value):
        raise TypeError(f"type: {type(value).__name__}, expected DecCoins")
    return validate_dec_coins(value)


def validate_bypass_min_fee_msg_types(value: Any) -> list[str]:
    """Check that ``value`` is a list of message type URLs and return it."""
    if not isinstance(value, (list, tuple)) or not all(isinstance(t, str) for t in value):
        raise TypeError(f"type: {type(value).__name__}, expected list of message type URLs")
    for msg_type in value:
        if not msg_type:
            raise ValueError("invalid empty bypass msg type")
        if not msg_type.startswith(MSG_TYPE_URL_PREFIX):
            raise ValueError(f"invalid bypass msg type name {msg_type}")
    return list(value)


def validate_max_total_bypass_min_fee_msg_gas_usage(value: Any) -> int:
    """Check that ``value`` is an unsigned 64-bit integer and return it."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"type: {type(value).__name__}, expected uint64")
    if not 0 <= value <= _UINT64_MAX:
        raise ValueError(f"value {value} is out of range for uint64")
    return value


def validate_dec_coins(coins: Any) -> list[DecCoin]:
    """Check coins are sorted, unique, validly named and non-negative; return them."""
    seen: set[str] = set()
    previous = ""
    for index, coin in enumerate(coins):
        if coin.denom in seen:
            raise ValueError(f"duplicate denomination {coin.denom}")
        validate_denom(coin.denom)
        if index != 0 and coin.denom <= previous:
            raise ValueError(f"denomination {coin.denom} is not sorted")
        if coin.is_negative():
            raise ValueError(f"coin {coin.amount} amount is negative")
        previous = coin.denom
        seen.add(coin.denom)
    return list(coins)


@dataclass
class Params:
    """Global fee parameters."""

    minimum_gas_prices: list[DecCoin] = field(default_factory=list)
    bypass_min_fee_msg_types: list[str] = field(default_factory=list)
    max_total_bypass_min_fee_msg_gas_usage: int = 0

    def validate_basic(self) -> Params:
        """Validate every field; return the params or raise."""
        validate_minimum_gas_prices(self.minimum_gas_prices)
        validate_bypass_min_fee_msg_types(self.bypass_min_fee_msg_types)
        validate_max_total_bypass_min_fee_msg_gas_usage(self.max_total_bypass_min_fee_msg_gas_usage)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the params."""
        return {
            "minimum_gas_prices": [
                {"denom": coin.denom, "amount": f"{coin.amount:.{DEC_PRECISION}f}"}
                for coin in self.minimum_gas_prices
            ],
            "bypass_min_fee_msg_types": list(self.bypass_min_fee_msg_types),
            "max_total_bypass_min_fee_msg_gas_usage": str(self.max_total_bypass_min_fee_msg_gas_usage),
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> Params:
        """Build params from their JSON form; missing fields take zero values."""
        return Params(
            minimum_gas_prices=[
                DecCoin(item["denom"], Decimal(str(item["amount"])))
                for item in data.get("minimum_gas_prices") or []
            ],
            bypass_min_fee_msg_types=list(data.get("bypass_min_fee_msg_types") or []),
            max_total_bypass_min_fee_msg_gas_usage=int(data.get("max_total_bypass_min_fee_msg_gas_usage") or 0),
        )


PARAM_SET_PAIRS = (
    (PARAM_STORE_KEY_MIN_GAS_PRICES, "minimum_gas_prices", validate_minimum_gas_prices),
    (PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES, "bypass_min_fee_msg_types", validate_bypass_min_fee_msg_types),
    (
        PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE,
        "max_total_bypass_min_fee_msg_gas_usage",
        validate_max_total_bypass_min_fee_msg_gas_usage,
    ),
)


def default_params() -> Params:
    """Return the default global fee params."""
    return Params(
        minimum_gas_prices=list(DEFAULT_MIN_GAS_PRICES),
        bypass_min_fee_msg_types=list(DEFAULT_BYPASS_MIN_FEE_MSG_TYPES),
        max_total_bypass_min_fee_msg_gas_usage=DEFAULT_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE,
    )


@dataclass
class GenesisState:
    """Genesis state of the global fee module."""

    params: Params = field(default_factory=Params)


def default_genesis_state() -> GenesisState:
    """Return a genesis state holding the default params."""
    return GenesisState(default_params())


def genesis_state_from_app_state(app_state: Mapping[str, Any]) -> GenesisState:
    """Extract the module's genesis state from the application genesis state.

    The module entry may be raw JSON (str or bytes) or an already decoded mapping.
    """
    raw = app_state.get(MODULE_NAME)
    if raw is None:
        return GenesisState()
    data = json.loads(raw) if isinstance(raw, (str, bytes, bytearray)) else raw
    return GenesisState(Params.from_dict(data.get("params") or {}))


def validate_genesis(state: GenesisState) -> GenesisState:
    """Validate a genesis state; raise ValueError naming the params on failure."""
    try:
        state.params.validate_basic()
    except (TypeError, ValueError) as exc:
        raise ValueError(f"globalfee params: {exc}") from exc
    return state