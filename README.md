# xionfee

Minimum-fee rules, fee parameters and genesis tooling for a Cosmos-style
network, as a plain Python library with no third-party dependencies.

## What it offers

- **Decimal coins** (`xionfee.coins`): `DecCoin` (a denom with a `Decimal`
  amount, with `is_negative()` and `is_zero()`), plus `sort_coins`,
  `amount_of`, `coins_are_zero`, `validate_denom` and `format_coins`.
- **Fee arithmetic** (`xionfee.fee_utils`): `combined_fee_requirement`,
  `find` (binary search in a denom-sorted list), `max_coins`, `is_all_gt`
  and `denoms_subset_of`.
- **Module parameters and genesis** (`xionfee.params`): `Params` (with
  `validate_basic`, `to_dict` and `from_dict`), `GenesisState`,
  `default_params()`, `default_genesis_state()`,
  `genesis_state_from_app_state`, `validate_genesis`, and a validator for
  each parameter.
- **Parameter store and querier** (`xionfee.querier`): `ParamSubspace`, an
  in-memory parameter store that accepts only the module's registered keys,
  and `GrpcQuerier`, whose `params()` reads the current parameters from it.
- **Fee decorator** (`xionfee.ante`): `FeeDecorator` works out the minimum
  gas prices a transaction must pay and passes a `Context` carrying them to
  the next handler. In check mode the requirement is the node's local prices
  when they are strictly greater in every global denom, otherwise the global
  prices; in deliver mode it is the global prices alone. An empty global fee
  defaults to a zero coin in the staking bond denom. Simulations, and
  `FeeTx` transactions made only of bypass message types, are passed on
  unchanged.
- **Store migration** (`xionfee.migration`): `migrate_store` and `Migrator`
  move version 1 parameters to version 2, keeping the stored minimum gas
  prices and adding the default bypass settings.
- **Application module** (`xionfee.module`): `AppModule` with
  `default_genesis`, `validate_genesis`, `init_genesis`, `export_genesis`
  (all using JSON text), `consensus_version` and `run_migrations`.
- **Genesis tools** (`xionfee.genesis_tools`): `set_path`, and functions
  that rewrite a genesis document — `modify_genesis_short_proposals`,
  `modify_genesis_packet_forward_middleware`, `modify_genesis_inflation`,
  `modify_genesis_aa_allowed_code_ids` — chained with
  `modify_inter_chain_genesis`.
- **Transaction helpers** (`xionfee.tx_messages`): unsigned transaction
  JSON documents (`raw_json_msg_send` and others), argument lists for node
  commands (`tx_command`, `generate_only_command`, the token factory
  commands), `factory_denom`, and `parse_tx_output`, which raises
  `TxFailedError` on a non-zero result code.
- **Mint checks** (`xionfee.mint_check`): parsing of supply, balance and
  module-account query responses, `block_provision`, `mint_harness`, which
  returns a `MintObservation` of the supply change and fees accrued between
  two heights, and `random_heights`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from decimal import Decimal

from xionfee.coins import DecCoin
from xionfee.fee_utils import combined_fee_requirement

global_fees = [DecCoin("photon", Decimal(1)), DecCoin("stake", Decimal(2))]
local_prices = [DecCoin("photon", Decimal(10))]

print(combined_fee_requirement(global_fees, local_prices))
# photon at 10, stake at 2
```

`combined_fee_requirement` raises `LookupError` when the global fee list is
empty.

```python
from decimal import Decimal

from xionfee.ante import Context, FeeDecorator, FeeTx
from xionfee.coins import DecCoin
from xionfee.params import default_params
from xionfee.querier import ParamSubspace

subspace = ParamSubspace()
subspace.set_param_set(default_params())
decorator = FeeDecorator(subspace, lambda ctx: "uxion")

ctx = Context(min_gas_prices=[DecCoin("uxion", Decimal("0.025"))], is_check_tx=True)
tx = FeeTx(msgs=["/cosmos.bank.v1beta1.MsgSend"])
print(decorator.get_tx_fee_required(ctx, tx))
# uxion at 0.025: the local price beats the default zero global fee
```

## What it does not do

- It has no command-line program and runs no node: the transaction helpers
  only build documents and argument lists, and parse output you pass in.
- `ParamSubspace` keeps parameters in memory only; nothing is written to
  disk.
- It does not decide which chain queries smart contracts may make, and it
  does not route or answer such queries.