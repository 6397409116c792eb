import json

import pytest

from xionfee.genesis_tools import (
    MAX_DEPOSIT_PERIOD,
    VOTING_PERIOD,
    ChainConfig,
    modify_genesis_aa_allowed_code_ids,
    modify_genesis_inflation,
    modify_genesis_packet_forward_middleware,
    modify_genesis_short_proposals,
    modify_inter_chain_genesis,
    set_path,
)


def _genesis():
    return json.dumps(
        {
            "chain_id": "xion-1",
            "app_state": {
                "gov": {
                    "params": {
                        "voting_period": "172800s",
                        "max_deposit_period": "172800s",
                        "min_deposit": [{"denom": "stake", "amount": "10000000"}],
                    }
                },
                "mint": {"params": {"inflation_min": "0.07", "inflation_max": "0.2"}},
                "packetfowardmiddleware": {"params": {"fee_percentage": "0.1"}},
                "abstractaccount": {"params": {"allow_all_code_ids": True, "allowed_code_ids": []}},
            },
        }
    ).encode()


def test_set_path_sets_nested_key_and_list_item():
    doc = {"a": {"b": [{"c": 1}]}}
    set_path(doc, "x", "a", "b", 0, "c")
    set_path(doc, "new", "a", "d")
    assert doc == {"a": {"b": [{"c": "x"}], "d": "new"}}


def test_set_path_missing_intermediate_raises():
    with pytest.raises(KeyError):
        set_path({"a": {}}, 1, "a", "b", "c")


def test_set_path_index_out_of_range_raises():
    with pytest.raises(IndexError):
        set_path({"a": []}, 1, "a", 0)


def test_set_path_empty_path_raises():
    with pytest.raises(ValueError):
        set_path({}, 1)


def test_short_proposals_sets_gov_params():
    config = ChainConfig()
    out = json.loads(modify_genesis_short_proposals(config, _genesis(), VOTING_PERIOD, MAX_DEPOSIT_PERIOD))
    params = out["app_state"]["gov"]["params"]
    assert params["voting_period"] == VOTING_PERIOD
    assert params["max_deposit_period"] == MAX_DEPOSIT_PERIOD
    assert params["min_deposit"] == [{"denom": config.denom, "amount": "100"}]
    assert out["chain_id"] == "xion-1"


def test_short_proposals_missing_min_deposit_raises():
    genesis = json.dumps({"app_state": {"gov": {"params": {}}}}).encode()
    with pytest.raises(ValueError, match="failed to set voting period"):
        modify_genesis_short_proposals(ChainConfig(), genesis, "1s", "2s")


def test_short_proposals_needs_two_params():
    with pytest.raises(ValueError):
        modify_genesis_short_proposals(ChainConfig(), _genesis(), "1s")


def test_invalid_json_raises():
    with pytest.raises(ValueError, match="failed to unmarshal genesis file"):
        modify_genesis_packet_forward_middleware(ChainConfig(), b"{not json")


def test_packet_forward_middleware_fee_zeroed():
    out = json.loads(modify_genesis_packet_forward_middleware(ChainConfig(), _genesis()))
    assert out["app_state"]["packetfowardmiddleware"]["params"]["fee_percentage"] == "0.0"


def test_inflation_sets_three_values():
    out = json.loads(modify_genesis_inflation(ChainConfig(), _genesis(), "0.01", "0.02", "0.03"))
    params = out["app_state"]["mint"]["params"]
    assert (params["inflation_min"], params["inflation_max"], params["inflation_rate_change"]) == (
        "0.01",
        "0.02",
        "0.03",
    )


def test_aa_allowed_code_ids():
    out = json.loads(modify_genesis_aa_allowed_code_ids(ChainConfig(), _genesis()))
    assert out["app_state"]["abstractaccount"]["params"] == {
        "allowed_code_ids": [1],
        "allow_all_code_ids": False,
    }


def test_output_is_compact_with_sorted_keys():
    genesis = json.dumps({"z": 1, "app_state": {"packetfowardmiddleware": {"params": {}}}}).encode()
    out = modify_genesis_packet_forward_middleware(ChainConfig(), genesis)
    assert out == b'{"app_state":{"packetfowardmiddleware":{"params":{"fee_percentage":"0.0"}}},"z":1}'


def test_inter_chain_genesis_applies_all_in_order():
    modify = modify_inter_chain_genesis(
        [modify_genesis_short_proposals, modify_genesis_inflation],
        [[VOTING_PERIOD, MAX_DEPOSIT_PERIOD], ["0.0", "0.0", "0.5"], ["extra"]],
    )
    out = json.loads(modify(ChainConfig(), _genesis()))
    assert out["app_state"]["gov"]["params"]["voting_period"] == VOTING_PERIOD
    assert out["app_state"]["mint"]["params"]["inflation_rate_change"] == "0.5"


def test_inter_chain_genesis_matches_single_step():
    config = ChainConfig(denom="uxion")
    modify = modify_inter_chain_genesis([modify_genesis_aa_allowed_code_ids], [[]])
    assert modify(config, _genesis()) == modify_genesis_aa_allowed_code_ids(config, _genesis())


def test_inter_chain_genesis_wraps_errors():
    modify = modify_inter_chain_genesis([modify_genesis_inflation], [["0.1", "0.2", "0.3"]])
    with pytest.raises(ValueError, match="failed to modify genesis"):
        modify(ChainConfig(), b'{"app_state": {}}')


def test_inter_chain_genesis_needs_params_for_each_fn():
    with pytest.raises(ValueError):
        modify_inter_chain_genesis([modify_genesis_inflation, modify_genesis_aa_allowed_code_ids], [[]])