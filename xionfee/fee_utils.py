"""Combining and comparing fee requirements expressed as decimal coins."""

from __future__ import annotations

from typing import Sequence

from xionfee.coins import DecCoin, amount_of, sort_coins


def combined_fee_requirement(
    global_fees: Sequence[DecCoin], min_gas_prices: Sequence[DecCoin]
) -> list[DecCoin]:
    """Merge global fees with local minimum gas prices.

    For every global fee denom, the local price is used when it is higher.
    Raises LookupError when ``global_fees`` is empty.
    """
    if not global_fees:
        raise LookupError("global fee cannot be empty: not found")

    if not min_gas_prices:
        return list(global_fees)

    combined = []
    for fee in global_fees:
        local = find(min_gas_prices, fee.denom)
        combined.append(local if local is not None and local.amount > fee.amount else fee)
    return sort_coins(combined)


def find(coins: Sequence[DecCoin], denom: str) -> DecCoin | None:
    """Binary search a denom-sorted sequence; return the coin or None."""
    low, high = 0, len(coins)
    while low < high:
        mid = low + (high - low) // 2
        coin = coins[mid]
        if denom < coin.denom:
            high = mid
        elif denom == coin.denom:
            return coin
        else:
            low = mid + 1
    return None


def max_coins(a: Sequence[DecCoin], b: Sequence[DecCoin]) -> Sequence[DecCoin]:
    """Return ``a`` if it is strictly greater than ``b`` in every denom of ``b``, else ``b``."""
    return a if is_all_gt(a, b) else b


def is_all_gt(a: Sequence[DecCoin], b: Sequence[DecCoin]) -> bool:
    """Whether ``a`` holds every denom of ``b`` with a strictly larger amount."""
    if not a:
        return False
    if not b:
        return True
    if not denoms_subset_of(b, a):
        return False
    return all(amount_of(a, coin.denom) > coin.amount for coin in b)


def denoms_subset_of(a: Sequence[DecCoin], b: Sequence[DecCoin]) -> bool:
    """Whether every denom of ``a`` has a non-zero amount in ``b``."""
    if len(a) > len(b):
        return False
    return all(amount_of(b, coin.denom) != 0 for coin in a)