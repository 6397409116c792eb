"""Checks of the mint module's behaviour from bank and mint query responses.

Between two consecutive heights the total supply changes by the tokens that
were minted or burned. The distribution module account receives both the fees
collected in the block and the minted tokens. Subtracting the supply change
from the growth of that account gives the fees accrued in the block.
"""

from __future__ import annotations

import json
import random
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

DEC_PRECISION = 18
MIN_CHAIN_HEIGHT = 12
HEIGHTS_CHECKED = 10

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class MintObservation:
    """What changed in one block: the supply and the fees accrued."""

    token_change: int
    fees_accrued: int


def _decode(response: Any) -> Mapping[str, Any]:
    if isinstance(response, (str, bytes, bytearray)):
        try:
            response = json.loads(response)
        except ValueError as exc:
            raise ValueError(f"invalid query response: {exc}") from exc
    if not isinstance(response, Mapping):
        raise ValueError("invalid query response: expected a JSON object")
    return response


def _get(node: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(node, Mapping):
            raise TypeError(f"cannot look up {key!r} in {type(node).__name__}")
        if key not in node:
            raise KeyError(f"missing key {key!r}")
        node = node[key]
    return node


def _get_string(node: Any, *path: str) -> str:
    value = _get(node, *path)
    if not isinstance(value, str):
        raise TypeError(f"expected a string at {'.'.join(path)}, got {type(value).__name__}")
    return value


def _get_list(node: Any, key: str) -> list[Any]:
    value = _get(node, key)
    if not isinstance(value, list):
        raise TypeError(f"expected a list at {key}, got {type(value).__name__}")
    return value


def _first_coin_amount(coin: Any, denom: str) -> str:
    coin_denom = _get_string(coin, "denom")
    if coin_denom != denom:
        raise ValueError(f"expected denom {denom}, got {coin_denom}")
    return _get_string(coin, "amount")


def parse_total_supply(response: Any, denom: str) -> str:
    """Return the amount of the first coin in a bank ``total`` response.

    The chain is expected to hold a single denom, which must be ``denom``.
    """
    supply = _get_list(_decode(response), "supply")
    if not supply:
        raise ValueError("total supply response holds no coins")
    return _first_coin_amount(supply[0], denom)


def parse_balance(response: Any, denom: str) -> str:
    """Return the amount of the first coin in a bank ``balances`` response, or "0" if empty."""
    balances = _get_list(_decode(response), "balances")
    if not balances:
        return "0"
    return _first_coin_amount(balances[0], denom)


def parse_module_address(response: Any) -> str:
    """Return the address of a module account from an auth ``module-account`` response."""
    return _get_string(_decode(response), "account", "value", "address")


def _parse_int64(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, got bool")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text or not text.lstrip("+-").isdigit() or text != value:
            raise ValueError(f"{name} {value!r} is not an integer")
        number = int(text)
    else:
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"{name} {value} is out of range for int64")
    return number


def block_provision(annual_provision: Any, blocks_per_year: int) -> Decimal:
    """Return the tokens minted per block: the annual provision over the blocks per year.

    The result has 18 decimal places and is truncated toward zero.
    """
    if isinstance(blocks_per_year, bool) or not isinstance(blocks_per_year, int):
        raise TypeError(f"blocks per year must be an integer, got {type(blocks_per_year).__name__}")
    if blocks_per_year == 0:
        raise ZeroDivisionError("blocks per year cannot be zero")
    if isinstance(annual_provision, bool) or not isinstance(annual_provision, (str, int, Decimal)):
        raise TypeError(f"annual provision must be a decimal string, got {type(annual_provision).__name__}")
    try:
        provision = Decimal(str(annual_provision).strip())
    except InvalidOperation as exc:
        raise ValueError(f"invalid annual provision {annual_provision!r}") from exc
    if not provision.is_finite():
        raise ValueError(f"invalid annual provision {annual_provision!r}")
    exponent = provision.as_tuple().exponent
    if isinstance(exponent, int) and exponent < -DEC_PRECISION:
        raise ValueError(f"annual provision {annual_provision!r} has more than {DEC_PRECISION} decimal places")
    scaled = int(provision.scaleb(DEC_PRECISION))
    quotient = abs(scaled) // abs(blocks_per_year)
    if (scaled < 0) != (blocks_per_year < 0):
        quotient = -quotient
    return Decimal(quotient).scaleb(-DEC_PRECISION).quantize(Decimal(1).scaleb(-DEC_PRECISION))


def mint_harness(
    previous_supply: Any,
    current_supply: Any,
    previous_distribution_balance: Any,
    current_distribution_balance: Any,
) -> MintObservation:
    """Compute the supply change and the fees accrued between two heights."""
    previous = _parse_int64(previous_supply, "previous supply")
    current = _parse_int64(current_supply, "current supply")
    previous_balance = _parse_int64(previous_distribution_balance, "previous distribution balance")
    current_balance = _parse_int64(current_distribution_balance, "current distribution balance")
    token_change = current - previous
    delta = current_balance - previous_balance
    return MintObservation(token_change=token_change, fees_accrued=delta - token_change)


def random_heights(current_height: int, rng: random.Random | None = None) -> range:
    """Pick ten consecutive heights at random, starting at 2 or later, below ``current_height``.

    The chain must have at least 12 blocks.
    """
    if isinstance(current_height, bool) or not isinstance(current_height, int):
        raise TypeError(f"height must be an integer, got {type(current_height).__name__}")
    if current_height < MIN_CHAIN_HEIGHT:
        raise ValueError(f"chain must have at least {MIN_CHAIN_HEIGHT} blocks, has {current_height}")
    rng = rng if rng is not None else random.Random()
    start = rng.randrange(current_height - 11) + 2
    return range(start, start + HEIGHTS_CHECKED)