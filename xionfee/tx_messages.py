"""Unsigned transaction documents and command lines for driving a chain node."""

from __future__ import annotations

import json
from typing import Any, Sequence

KEYRING_BACKEND_TEST = "test"
BINARY = "xiond"
DEFAULT_GAS_LIMIT = "200000"
SEND_AMOUNT = "100000"
CREATE_DENOM_GAS = "2500000"

_UINT64_MAX = 2**64 - 1


class TxFailedError(Exception):
    """A transaction that was accepted for broadcast but finished with a non-zero code."""

    def __init__(self, tx_hash: str, code: int, raw_log: str) -> None:
        super().__init__(f"transaction failed with code {code}: {raw_log}")
        self.tx_hash = tx_hash
        self.code = code
        self.raw_log = raw_log


def _unsigned_tx(message: dict[str, Any]) -> bytes:
    document = {
        "body": {
            "messages": [message],
            "memo": "",
            "timeout_height": "0",
            "extension_options": [],
            "non_critical_extension_options": [],
        },
        "auth_info": {
            "signer_infos": [],
            "fee": {
                "amount": [],
                "gas_limit": DEFAULT_GAS_LIMIT,
                "payer": "",
                "granter": "",
            },
            "tip": None,
        },
        "signatures": [],
    }
    return json.dumps(document, indent=2).encode("utf-8")


def raw_json_msg_send(from_address: str, to_address: str, denom: str) -> bytes:
    """Return an unsigned transaction sending 100000 of ``denom`` between two addresses."""
    return _unsigned_tx(
        {
            "@type": "/cosmos.bank.v1beta1.MsgSend",
            "from_address": from_address,
            "to_address": to_address,
            "amount": [{"denom": denom, "amount": SEND_AMOUNT}],
        }
    )


def raw_json_msg_exec_contract_remove_authenticator(sender: str, contract: str, index: int) -> bytes:
    """Return an unsigned transaction asking ``contract`` to remove authenticator ``index``."""
    _check_uint64(index, "index")
    return _unsigned_tx(
        {
            "@type": "/cosmwasm.wasm.v1.MsgExecuteContract",
            "sender": sender,
            "contract": contract,
            "msg": {"remove_auth_method": {"id": index}},
            "funds": [],
        }
    )


def raw_json_msg_migrate_contract(sender: str, code_id: str) -> bytes:
    """Return an unsigned transaction migrating the account contract at ``sender`` to ``code_id``."""
    return _unsigned_tx(
        {
            "@type": "/cosmwasm.wasm.v1.MsgMigrateContract",
            "sender": sender,
            "contract": sender,
            "code_id": str(code_id),
            "msg": {},
        }
    )


def _format_float(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def tx_command(key_name: str, gas_prices: str, gas_adjustment: float, *args: str) -> list[str]:
    """Return the arguments of a signed, auto-gassed ``tx`` subcommand."""
    return [
        "tx",
        *args,
        "--from", key_name,
        "--gas-prices", gas_prices,
        "--gas-adjustment", _format_float(gas_adjustment),
        "--gas", "auto",
        "--keyring-backend", KEYRING_BACKEND_TEST,
        "--output", "json",
        "-y",
    ]


def generate_only_command(key_name: str, *args: str) -> list[str]:
    """Return the arguments of a ``tx`` subcommand that only prints the unsigned transaction."""
    return [
        "tx",
        *args,
        "--from", key_name,
        "--keyring-backend", KEYRING_BACKEND_TEST,
        "--output", "json",
        "--generate-only",
    ]


def parse_tx_output(stdout: bytes | str) -> str:
    """Return the transaction hash from a node's JSON reply; raise TxFailedError on a non-zero code."""
    try:
        output = json.loads(stdout)
    except ValueError as exc:
        raise ValueError(f"invalid transaction output: {exc}") from exc
    if not isinstance(output, dict):
        raise ValueError("invalid transaction output: expected a JSON object")
    tx_hash = str(output.get("txhash", ""))
    code = int(output.get("code", 0) or 0)
    if code != 0:
        raise TxFailedError(tx_hash, code, str(output.get("raw_log", "")))
    return tx_hash


def factory_denom(address: str, sub_denom: str) -> str:
    """Return the full token factory denom created by ``address``."""
    return f"factory/{address}/{sub_denom}"


def _check_uint64(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if not 0 <= value <= _UINT64_MAX:
        raise ValueError(f"{name} {value} is out of range for uint64")
    return value


def _node_flags(node: str, home: str, chain_id: str, key_name: str) -> list[str]:
    return ["--node", node, "--home", home, "--chain-id", chain_id, "--from", key_name]


def _keyring_flags(home: str) -> list[str]:
    return ["--keyring-dir", home, "--keyring-backend", KEYRING_BACKEND_TEST, "-y"]


def tokenfactory_create_denom_command(
    sub_denom: str, node: str, home: str, chain_id: str, key_name: str, fee_coin: str
) -> list[str]:
    """Return the command that creates a token factory denom; fees are added when given."""
    command = [
        BINARY, "tx", "tokenfactory", "create-denom", sub_denom,
        *_node_flags(node, home, chain_id, key_name),
        "--gas", CREATE_DENOM_GAS,
        *_keyring_flags(home),
    ]
    if fee_coin:
        command += ["--fees", fee_coin]
    return command


def tokenfactory_mint_command(
    amount: int, full_denom: str, node: str, home: str, chain_id: str, key_name: str
) -> list[str]:
    """Return the command that mints ``amount`` of ``full_denom`` to the signer."""
    coin = f"{_check_uint64(amount, 'amount')}{full_denom}"
    return [
        BINARY, "tx", "tokenfactory", "mint", coin,
        *_node_flags(node, home, chain_id, key_name),
        *_keyring_flags(home),
    ]


def tokenfactory_mint_to_command(
    receiver: str, amount: int, full_denom: str, node: str, home: str, chain_id: str, key_name: str
) -> list[str]:
    """Return the command that mints ``amount`` of ``full_denom`` to ``receiver``."""
    coin = f"{_check_uint64(amount, 'amount')}{full_denom}"
    return [
        BINARY, "tx", "tokenfactory", "mint-to", receiver, coin,
        *_node_flags(node, home, chain_id, key_name),
        *_keyring_flags(home),
    ]


def tokenfactory_change_admin_command(
    full_denom: str, new_admin: str, node: str, home: str, chain_id: str, key_name: str
) -> list[str]:
    """Return the command that hands the admin of ``full_denom`` to ``new_admin``."""
    return [
        BINARY, "tx", "tokenfactory", "change-admin", full_denom, new_admin,
        *_node_flags(node, home, chain_id, key_name),
        *_keyring_flags(home),
    ]


def _flag_value(command: Sequence[str], flag: str) -> str:
    return command[list(command).index(flag) + 1]