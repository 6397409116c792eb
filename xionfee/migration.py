"""In-place store migrations of the global fee module."""

from __future__ import annotations

from typing import Any

from xionfee.params import PARAM_STORE_KEY_MIN_GAS_PRICES, Params, default_params


def migrate_store(subspace: Any) -> None:
    """Keep the stored minimum gas prices and add the default bypass params."""
    old_min_gas_prices = subspace.get(PARAM_STORE_KEY_MIN_GAS_PRICES)
    defaults = default_params()
    subspace.set_param_set(
        Params(
            minimum_gas_prices=list(old_min_gas_prices),
            bypass_min_fee_msg_types=defaults.bypass_min_fee_msg_types,
            max_total_bypass_min_fee_msg_gas_usage=defaults.max_total_bypass_min_fee_msg_gas_usage,
        )
    )


class Migrator:
    """Runs the module's store migrations against a parameter subspace."""

    def __init__(self, subspace: Any) -> None:
        self.subspace = subspace

    def migrate1to2(self) -> None:
        """Migrate the store from version 1 to version 2."""
        migrate_store(self.subspace)