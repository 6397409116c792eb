import json
from decimal import Decimal

import pytest

from xionfee.coins import DecCoin
from xionfee.params import (
    DEFAULT_BYPASS_MIN_FEE_MSG_TYPES,
    DEFAULT_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE,
    MODULE_NAME,
    GenesisState,
    Params,
    default_genesis_state,
    default_params,
    genesis_state_from_app_state,
    validate_bypass_min_fee_msg_types,
    validate_dec_coins,
    validate_genesis,
    validate_max_total_bypass_min_fee_msg_gas_usage,
    validate_minimum_gas_prices,
)


def test_default_params():
    p = default_params()
    assert p.minimum_gas_prices == []
    assert p.bypass_min_fee_msg_types == list(DEFAULT_BYPASS_MIN_FEE_MSG_TYPES)
    assert p.max_total_bypass_min_fee_msg_gas_usage == DEFAULT_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE
    assert DEFAULT_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE == 1_000_000


def test_default_params_lists_are_independent():
    first = default_params()
    first.bypass_min_fee_msg_types.append("/extra.Msg")
    assert "/extra.Msg" not in default_params().bypass_min_fee_msg_types


@pytest.mark.parametrize(
    "coins",
    [
        pytest.param(default_params().minimum_gas_prices, id="default"),
        pytest.param([DecCoin("atom", 0), DecCoin("photon", 0)], id="zero-amounts"),
    ],
)
def test_validate_min_gas_prices_pass(coins):
    assert validate_minimum_gas_prices(coins) == list(coins)


def test_validate_min_gas_prices_wrong_type():
    with pytest.raises(TypeError):
        validate_minimum_gas_prices([("photon", 1)])


@pytest.mark.parametrize(
    "coins",
    [
        pytest.param([DecCoin("photon", 1), DecCoin("photon", 1)], id="duplicate"),
        pytest.param([DecCoin("photon", 1), DecCoin("atom", 1)], id="unsorted"),
        pytest.param([DecCoin("photon", -1)], id="negative"),
        pytest.param([DecCoin("photon!", -1)], id="invalid-denom"),
    ],
)
def test_validate_min_gas_prices_fail(coins):
    with pytest.raises(ValueError):
        validate_minimum_gas_prices(coins)


def test_validate_dec_coins_messages():
    with pytest.raises(ValueError, match="duplicate denomination photon"):
        validate_dec_coins([DecCoin("photon", 1), DecCoin("photon", 1)])
    with pytest.raises(ValueError, match="denomination atom is not sorted"):
        validate_dec_coins([DecCoin("photon", 1), DecCoin("atom", 1)])


@pytest.mark.parametrize(
    "msg_types",
    [
        pytest.param(default_params().bypass_min_fee_msg_types, id="default"),
        pytest.param([], id="empty"),
    ],
)
def test_validate_bypass_msg_types_pass(msg_types):
    assert validate_bypass_min_fee_msg_types(msg_types) == msg_types


def test_validate_bypass_msg_types_wrong_type():
    with pytest.raises(TypeError):
        validate_bypass_min_fee_msg_types([0, 1, 2, 3])


@pytest.mark.parametrize(
    "msg_types",
    [
        pytest.param([""], id="empty-type"),
        pytest.param(["ibc.core.channel.v1.MsgRecvPacket"], id="no-slash"),
        pytest.param(["/ibc.core.channel.v1.MsgRecvPacket", ""], id="mixed"),
    ],
)
def test_validate_bypass_msg_types_fail(msg_types):
    with pytest.raises(ValueError):
        validate_bypass_min_fee_msg_types(msg_types)


@pytest.mark.parametrize("value", [default_params().max_total_bypass_min_fee_msg_gas_usage, 0])
def test_validate_max_gas_usage_pass(value):
    assert validate_max_total_bypass_min_fee_msg_gas_usage(value) == value


def test_validate_max_gas_usage_negative():
    with pytest.raises(ValueError):
        validate_max_total_bypass_min_fee_msg_gas_usage(-1)


def test_validate_max_gas_usage_wrong_type():
    with pytest.raises(TypeError):
        validate_max_total_bypass_min_fee_msg_gas_usage("5")


def test_validate_basic_default():
    p = default_params()
    assert p.validate_basic() is p


def test_validate_basic_rejects_bad_field():
    p = default_params()
    p.bypass_min_fee_msg_types = ["no-slash"]
    with pytest.raises(ValueError):
        p.validate_basic()


def test_params_dict_round_trip():
    p = default_params()
    p.minimum_gas_prices = [DecCoin("uxion", Decimal("0.025"))]
    assert Params.from_dict(p.to_dict()) == p


def test_params_to_dict_wire_form():
    data = default_params().to_dict()
    assert data["max_total_bypass_min_fee_msg_gas_usage"] == "1000000"
    assert data["minimum_gas_prices"] == []
    assert json.loads(json.dumps(data)) == data


def test_params_from_empty_dict_is_zero_valued():
    assert Params.from_dict({}) == Params()


def test_default_genesis_state():
    assert default_genesis_state() == GenesisState(default_params())


def test_genesis_from_app_state_json_string():
    params = default_params()
    app_state = {MODULE_NAME: json.dumps({"params": params.to_dict()})}
    assert genesis_state_from_app_state(app_state).params == params


def test_genesis_from_app_state_missing_module():
    assert genesis_state_from_app_state({"bank": "{}"}) == GenesisState()


def test_validate_genesis_ok():
    state = default_genesis_state()
    assert validate_genesis(state) is state


def test_validate_genesis_wraps_error():
    state = GenesisState(Params(minimum_gas_prices=[DecCoin("photon", -1)]))
    with pytest.raises(ValueError, match="^globalfee params: "):
        validate_genesis(state)