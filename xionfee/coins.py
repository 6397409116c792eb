"""Decimal coins: a denomination paired with a decimal amount."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable

DEC_PRECISION = 18

_DENOM_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}")


@dataclass(frozen=True)
class DecCoin:
    """A coin whose amount is a decimal number."""

    denom: str
    amount: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        amount = self.amount
        if isinstance(amount, Decimal):
            return
        if isinstance(amount, bool) or not isinstance(amount, (int, float, str)):
            raise TypeError(f"coin amount must be a number, got {type(amount).__name__}")
        try:
            object.__setattr__(self, "amount", Decimal(str(amount)))
        except InvalidOperation as exc:
            raise ValueError(f"invalid coin amount {amount!r}") from exc

    def is_negative(self) -> bool:
        """Whether the amount is below zero."""
        return self.amount < 0

    def is_zero(self) -> bool:
        """Whether the amount equals zero."""
        return self.amount == 0

    def __str__(self) -> str:
        return f"{self.amount:.{DEC_PRECISION}f}{self.denom}"


def sort_coins(coins: Iterable[DecCoin]) -> list[DecCoin]:
    """Return the coins ordered by denomination."""
    return sorted(coins, key=lambda coin: coin.denom)


def amount_of(coins: Iterable[DecCoin], denom: str) -> Decimal:
    """Return the amount held in ``denom``, or zero when it is absent."""
    return next((coin.amount for coin in coins if coin.denom == denom), Decimal(0))


def coins_are_zero(coins: Iterable[DecCoin]) -> bool:
    """Whether every coin is zero; an empty collection counts as zero."""
    return all(coin.is_zero() for coin in coins)


def validate_denom(denom: str) -> str:
    """Check a denomination's syntax and return it; raise ValueError if invalid."""
    if not isinstance(denom, str) or not _DENOM_RE.fullmatch(denom):
        raise ValueError(f"invalid denom: {denom}")
    return denom


def format_coins(coins: Iterable[DecCoin]) -> str:
    """Render coins as a comma separated list such as ``0.5uxion,1.0stake``."""
    return ",".join(str(coin) for coin in coins)