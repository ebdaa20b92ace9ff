import itertools

import pytest

from cafe.menu import (
    DRINK_PRICE,
    SET_PRICE,
    SNACK_PRICE,
    clean_cart,
    format_won,
    summary_lines,
    total,
)


def test_empty_cart_is_free():
    assert total({}) == 0


def test_one_drink_one_snack_is_a_set():
    assert total({"아아": 1, "핫도그": 1}) == SET_PRICE == 5500


def test_extra_drink_is_full_price():
    assert total({"아아": 2, "핫도그": 1}) == SET_PRICE + DRINK_PRICE


def test_extra_snack_is_full_price():
    assert total({"뜨아": 1, "핫도그": 1, "컵볶이": 2}) == SET_PRICE + 2 * SNACK_PRICE


def test_sets_span_different_items():
    cart = {"뜨아": 1, "레모네이드": 1, "핫도그": 1, "컵볶이": 1}
    assert total(cart) == 2 * SET_PRICE


def test_drinks_only():
    assert total({"아이스티": 3}) == 3 * DRINK_PRICE


def test_zero_quantities_are_ignored():
    assert total({"아아": 0, "핫도그": 0}) == 0


def test_total_never_decreases_when_a_quantity_grows():
    names = ["아아", "레모네이드", "핫도그", "컵볶이"]
    for quantities in itertools.product(range(3), repeat=len(names)):
        cart = dict(zip(names, quantities))
        base = total(cart)
        for name in names:
            bigger = dict(cart, **{name: cart[name] + 1})
            assert total(bigger) >= base


def test_unknown_item_rejected():
    with pytest.raises(ValueError):
        total({"라떼": 1})


def test_negative_quantity_rejected():
    with pytest.raises(ValueError):
        total({"아아": -1})


def test_clean_cart_drops_zeros_and_keeps_menu_order():
    assert list(clean_cart({"핫도그": 1, "아아": 0, "뜨아": 2})) == ["뜨아", "핫도그"]


def test_summary_lines():
    assert summary_lines({"아아": 2, "핫도그": 0}) == ["• 아아 x2"]


def test_format_won():
    assert format_won(8500) == "8,500원"
