"""Helpers that rewrite a chain's genesis document before the chain starts."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Sequence

VOTING_PERIOD = "10s"
MAX_DEPOSIT_PERIOD = "10s"
PACKET_FORWARD_FEE_PERCENTAGE = "0.0"
MIN_INFLATION = "0.0"
MAX_INFLATION = "0.0"

GenesisModifier = Callable[..., bytes]


@dataclass
class ChainConfig:
    """The parts of a chain's configuration that genesis modifiers read."""

    chain_id: str = "xion-1"
    denom: str = "uxion"
    bech32_prefix: str = "xion"
    bin: str = "xiond"
    type: str = "cosmos"
    gas_prices: str = ""
    gas_adjustment: float = 2.0
    trusting_period: str = "336h"


def _step(node: Any, key: Any) -> Any:
    if isinstance(node, dict):
        if not isinstance(key, str):
            raise TypeError(f"map key must be a string, got {type(key).__name__}")
        if key not in node:
            raise KeyError(f"missing key {key!r}")
        return node[key]
    if isinstance(node, list):
        if isinstance(key, bool) or not isinstance(key, int):
            raise TypeError(f"list index must be an integer, got {type(key).__name__}")
        if not 0 <= key < len(node):
            raise IndexError(f"index {key} out of range for length {len(node)}")
        return node[key]
    raise TypeError(f"cannot descend into {type(node).__name__} with {key!r}")


def set_path(document: Any, value: Any, *args: Any) -> None:
    """Set ``value`` at the path ``args`` inside ``document``.

    Every element but the last must name an existing map entry or list item;
    the last may name a new map key or an existing list index.
    """
    if not args:
        raise ValueError("path cannot be empty")
    node = document
    for key in args[:-1]:
        node = _step(node, key)
    last = args[-1]
    if isinstance(node, dict):
        if not isinstance(last, str):
            raise TypeError(f"map key must be a string, got {type(last).__name__}")
        node[last] = value
    elif isinstance(node, list):
        _step(node, last)
        node[last] = value
    else:
        raise TypeError(f"cannot set {last!r} on {type(node).__name__}")


def _load(genesis: bytes | str) -> dict[str, Any]:
    try:
        document = json.loads(genesis)
    except ValueError as exc:
        raise ValueError(f"failed to unmarshal genesis file: {exc}") from exc
    if not isinstance(document, dict):
        raise ValueError("failed to unmarshal genesis file: genesis must be a JSON object")
    return document


def _dump(document: dict[str, Any]) -> bytes:
    text = json.dumps(document, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    for char, escaped in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def _apply(document: dict[str, Any], value: Any, path: Sequence[Any], message: str) -> None:
    try:
        set_path(document, value, *path)
    except (LookupError, TypeError, ValueError) as exc:
        raise ValueError(f"{message}: {exc}") from exc


def _require(args: Sequence[str], count: int, name: str) -> None:
    if len(args) < count:
        raise ValueError(f"{name} needs {count} parameters, got {len(args)}")


def modify_inter_chain_genesis(
    fns: Sequence[GenesisModifier], params: Sequence[Sequence[str]]
) -> Callable[[ChainConfig, bytes], bytes]:
    """Chain genesis modifiers; ``params[i]`` holds the extra arguments of ``fns[i]``."""
    if len(params) < len(fns):
        raise ValueError(f"{len(fns)} genesis modifiers but only {len(params)} parameter lists")
    steps = list(zip(fns, params))

    def modify(chain_config: ChainConfig, genesis: bytes) -> bytes:
        result = genesis
        for fn, fn_params in steps:
            try:
                result = fn(chain_config, result, *fn_params)
            except ValueError as exc:
                raise ValueError(f"failed to modify genesis: {exc}") from exc
        return result

    return modify


def modify_genesis_short_proposals(chain_config: ChainConfig, genesis: bytes, *args: str) -> bytes:
    """Set the gov voting and deposit periods and a minimum deposit of 100 in the chain denom."""
    _require(args, 2, "modify_genesis_short_proposals")
    document = _load(genesis)
    message = "failed to set voting period in genesis json"
    gov_params = ("app_state", "gov", "params")
    _apply(document, args[0], (*gov_params, "voting_period"), message)
    _apply(document, args[1], (*gov_params, "max_deposit_period"), message)
    _apply(document, chain_config.denom, (*gov_params, "min_deposit", 0, "denom"), message)
    _apply(document, "100", (*gov_params, "min_deposit", 0, "amount"), message)
    return _dump(document)


def modify_genesis_packet_forward_middleware(chain_config: ChainConfig, genesis: bytes, *args: str) -> bytes:
    """Set the packet forward middleware fee percentage to zero."""
    document = _load(genesis)
    _apply(
        document,
        PACKET_FORWARD_FEE_PERCENTAGE,
        ("app_state", "packetfowardmiddleware", "params", "fee_percentage"),
        "failed to set voting period in genesis json",
    )
    return _dump(document)


def modify_genesis_inflation(chain_config: ChainConfig, genesis: bytes, *args: str) -> bytes:
    """Set the mint module's minimum, maximum and rate of change of inflation."""
    _require(args, 3, "modify_genesis_inflation")
    document = _load(genesis)
    mint_params = ("app_state", "mint", "params")
    _apply(document, args[0], (*mint_params, "inflation_min"), "failed to set inflation in genesis json")
    _apply(document, args[1], (*mint_params, "inflation_max"), "failed to set inflation in genesis json")
    _apply(
        document,
        args[2],
        (*mint_params, "inflation_rate_change"),
        "failed to set rate of inflation change in genesis json",
    )
    return _dump(document)


def modify_genesis_aa_allowed_code_ids(chain_config: ChainConfig, genesis: bytes, *args: str) -> bytes:
    """Allow only code id 1 for abstract accounts."""
    document = _load(genesis)
    aa_params = ("app_state", "abstractaccount", "params")
    _apply(document, [1], (*aa_params, "allowed_code_ids"), "failed to set allowed code ids in genesis json")
    _apply(document, False, (*aa_params, "allow_all_code_ids"), "failed to set allow all code ids in genesis json")
    return _dump(document)