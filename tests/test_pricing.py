from types import SimpleNamespace

import pytest

from shared.pricing import calculate_totals, round_money, shipping_for


def line(price, quantity=1):
    return SimpleNamespace(price=price, quantity=quantity)


def test_round_money_rounds_half_up():
    assert round_money(2.675) == 2.68
    assert round_money(0.125) == 0.13
    assert round_money(10) == 10.0


@pytest.mark.parametrize(
    "subtotal, has_items, expected",
    [
        (35.0, True, 5.99),
        (35.01, True, 0.0),
        (10.0, True, 5.99),
        (0.0, False, 0.0),
    ],
)
def test_shipping_threshold(subtotal, has_items, expected):
    assert shipping_for(subtotal, has_items) == expected


def test_totals_below_free_shipping():
    totals = calculate_totals([line(10.0, 2), line(5.5)])
    assert totals == {
        "subtotal": 25.5,
        "item_count": 3,
        "shipping": 5.99,
        "tax": 2.04,
        "discount": 0.0,
        "total": 33.53,
    }


def test_totals_above_free_shipping():
    totals = calculate_totals([line(1199.99)])
    assert totals["shipping"] == 0.0
    assert totals["tax"] == 96.0
    assert totals["total"] == 1295.99


def test_empty_lines_cost_nothing():
    totals = calculate_totals([])
    assert totals["subtotal"] == 0.0
    assert totals["shipping"] == 0.0
    assert totals["total"] == 0.0
    assert totals["item_count"] == 0


def test_discount_never_pushes_total_below_zero():
    totals = calculate_totals([line(10.0)], discount=100)
    assert totals["discount"] == 100.0
    assert totals["total"] == 0.0


def test_discount_is_taken_off_total():
    totals = calculate_totals([line(50.0)], discount=4)
    # 50 + 0 shipping + 4 tax - 4
    assert totals["total"] == 50.0
