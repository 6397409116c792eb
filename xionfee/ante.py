"""Ante decorator that enforces the global and local minimum gas prices."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Callable, Iterable, Sequence

from xionfee.coins import DecCoin, coins_are_zero, sort_coins
from xionfee.fee_utils import max_coins
from xionfee.params import (
    PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES,
    PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE,
    PARAM_STORE_KEY_MIN_GAS_PRICES,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Context:
    """Execution context seen by ante handlers."""

    min_gas_prices: tuple[DecCoin, ...] = ()
    is_check_tx: bool = False
    chain_id: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_gas_prices", tuple(self.min_gas_prices))

    def with_min_gas_prices(self, min_gas_prices: Iterable[DecCoin]) -> Context:
        """Return a copy with different minimum gas prices."""
        return replace(self, min_gas_prices=tuple(min_gas_prices))

    def with_is_check_tx(self, is_check_tx: bool) -> Context:
        """Return a copy in or out of check-tx mode."""
        return replace(self, is_check_tx=is_check_tx)


@dataclass
class FeeTx:
    """A transaction that carries fees; messages are given by their type URLs."""

    msgs: list[str] = field(default_factory=list)
    fee: list[Any] = field(default_factory=list)
    gas_limit: int = 0


AnteHandler = Callable[[Context, Any, bool], Any]


@dataclass
class FeeDecorator:
    """Sets the required minimum gas prices on the context before the next handler.

    The requirement is the global fee in deliver mode and the larger of the
    global fee and the local minimum gas prices in check mode. Transactions
    made only of bypass messages, and simulations, are passed on unchanged.
    """

    global_min_fee_param_source: Any
    staking_keeper_bond_denom: Callable[[Context], str]

    def ante_handle(self, ctx: Context, tx: Any, simulate: bool, next_handler: AnteHandler) -> Any:
        """Run the fee check and call ``next_handler``."""
        if not isinstance(tx, FeeTx):
            raise TypeError("Tx must implement the FeeTx interface: tx parse error")

        if simulate or self.contains_only_bypass_min_fee_msgs(ctx, tx.msgs):
            return next_handler(ctx, tx, simulate)

        fee_required = self.get_tx_fee_required(ctx, tx)
        return next_handler(ctx.with_min_gas_prices(fee_required), tx, simulate)

    def get_tx_fee_required(self, ctx: Context, tx: Any) -> list[DecCoin]:
        """Return the fee requirement: global fee, combined with local prices in check mode."""
        global_fees = self.get_global_fee(ctx)
        if not ctx.is_check_tx:
            return global_fees

        local_fees = get_min_gas_price(ctx)
        fee_required = list(max_coins(local_fees, global_fees))
        logger.debug(
            "debugging globalfee: fee required=%s tx=%s min gas prices=%s global fees=%s local fees=%s",
            fee_required,
            tx,
            ctx.min_gas_prices,
            global_fees,
            local_fees,
        )
        return fee_required

    def get_global_fee(self, ctx: Context) -> list[DecCoin]:
        """Return the global minimum gas prices sorted by denom, defaulting to zero bond denom."""
        prices: Sequence[DecCoin] = []
        if self.global_min_fee_param_source.has(PARAM_STORE_KEY_MIN_GAS_PRICES):
            prices = self.global_min_fee_param_source.get(PARAM_STORE_KEY_MIN_GAS_PRICES)
        if not prices:
            prices = self.default_zero_global_fee(ctx)
        return sort_coins(prices)

    def default_zero_global_fee(self, ctx: Context) -> list[DecCoin]:
        """Return a zero coin in the staking bond denom; raise ValueError if it is empty."""
        bond_denom = self.staking_keeper_bond_denom(ctx)
        if not bond_denom:
            raise ValueError("empty staking bond denomination")
        return [DecCoin(bond_denom, Decimal(0))]

    def contains_only_bypass_min_fee_msgs(self, ctx: Context, msgs: Iterable[str]) -> bool:
        """Whether every message type is a bypass type."""
        bypass = set(self.get_bypass_msg_types(ctx))
        return all(msg in bypass for msg in msgs)

    def get_bypass_msg_types(self, ctx: Context) -> list[str]:
        """Return the configured bypass message types, or an empty list."""
        if self.global_min_fee_param_source.has(PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES):
            return list(self.global_min_fee_param_source.get(PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES))
        return []

    def get_max_total_bypass_min_fee_msg_gas_usage(self, ctx: Context) -> int:
        """Return the configured bypass gas allowance, or zero."""
        key = PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE
        if self.global_min_fee_param_source.has(key):
            return self.global_min_fee_param_source.get(key)
        return 0


def get_min_gas_price(ctx: Context) -> list[DecCoin]:
    """Return the node's local minimum gas prices sorted, or [] when they are all zero."""
    if coins_are_zero(ctx.min_gas_prices):
        return []
    return sort_coins(ctx.min_gas_prices)