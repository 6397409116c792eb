from decimal import Decimal

import pytest

from xionfee.coins import (
    DecCoin,
    amount_of,
    coins_are_zero,
    format_coins,
    sort_coins,
    validate_denom,
)


def test_amount_is_converted_to_decimal():
    coin = DecCoin("uxion", 5)
    assert coin.amount == Decimal(5)
    assert isinstance(coin.amount, Decimal)


def test_amount_from_string():
    assert DecCoin("uxion", "0.025").amount == Decimal("0.025")


def test_invalid_amount_string_raises():
    with pytest.raises(ValueError):
        DecCoin("uxion", "lots")


def test_invalid_amount_type_raises():
    with pytest.raises(TypeError):
        DecCoin("uxion", [1])


def test_is_negative_and_is_zero():
    assert DecCoin("photon", -1).is_negative()
    assert not DecCoin("photon", 1).is_negative()
    assert DecCoin("photon", 0).is_zero()
    assert not DecCoin("photon", 2).is_zero()


def test_sort_coins_orders_by_denom():
    coins = [DecCoin("stake", 2), DecCoin("photon", 1), DecCoin("Newphoton", 1)]
    result = sort_coins(coins)
    denoms = [coin.denom for coin in result]
    assert denoms == sorted(denoms)
    assert set(result) == set(coins)


def test_sort_coins_is_idempotent():
    coins = sort_coins([DecCoin("b-coin", 1), DecCoin("a-coin", 2)])
    assert sort_coins(coins) == coins


def test_amount_of_present_and_missing():
    coins = [DecCoin("photon", 3), DecCoin("stake", 7)]
    assert amount_of(coins, "stake") == Decimal(7)
    assert amount_of(coins, "uxion") == Decimal(0)


def test_coins_are_zero():
    assert coins_are_zero([])
    assert coins_are_zero([DecCoin("photon", 0), DecCoin("stake", 0)])
    assert not coins_are_zero([DecCoin("photon", 0), DecCoin("stake", 2)])


@pytest.mark.parametrize("denom", ["uxion", "photon", "factory/xion1abc/sub", "ibc/ABC", "a.b-c_d:e"])
def test_validate_denom_accepts(denom):
    assert validate_denom(denom) == denom


@pytest.mark.parametrize("denom", ["photon!", "ab", "1uxion", "", "x" * 129])
def test_validate_denom_rejects(denom):
    with pytest.raises(ValueError):
        validate_denom(denom)


def test_format_single_zero_coin():
    assert format_coins([DecCoin("uxion", 0)]) == "0.000000000000000000uxion"


def test_format_empty_is_empty_string():
    assert format_coins([]) == ""


def test_format_joins_coins_with_commas():
    coins = [DecCoin("photon", "1.5"), DecCoin("stake", 2)]
    joined = format_coins(coins)
    assert joined.split(",") == [format_coins([coin]) for coin in coins]
    assert joined.split(",")[0].endswith("photon")