import pytest

from cafe.models import InvalidTransition, Order, OrderStatus, advance


@pytest.mark.parametrize("current,target", [
    (OrderStatus.PENDING, OrderStatus.MADE),
    (OrderStatus.MADE, OrderStatus.SERVED),
])
def test_advance_allows_next_step(current, target):
    assert advance(current, target) is target


@pytest.mark.parametrize("current,target", [
    (OrderStatus.PENDING, OrderStatus.SERVED),
    (OrderStatus.PENDING, OrderStatus.PENDING),
    (OrderStatus.MADE, OrderStatus.MADE),
    (OrderStatus.MADE, OrderStatus.PENDING),
    (OrderStatus.SERVED, OrderStatus.MADE),
    (OrderStatus.SERVED, OrderStatus.SERVED),
])
def test_advance_rejects_other_jumps(current, target):
    with pytest.raises(InvalidTransition):
        advance(current, target)


def test_served_has_no_next():
    assert OrderStatus.SERVED.next is None


@pytest.mark.parametrize("made,served,expected", [
    (False, False, OrderStatus.PENDING),
    (True, False, OrderStatus.MADE),
    (True, True, OrderStatus.SERVED),
    (False, True, OrderStatus.SERVED),
])
def test_status_from_flags(make_item, made, served, expected):
    order = Order.from_item(make_item(1, made=made, served=served))
    assert order.status is expected


def test_from_item_converts_numbers(make_item):
    order = Order.from_item(make_item(7, items={"아아": 2}))
    assert order.order_id == "7"
    assert order.order_number == 7
    assert order.items == {"아아": 2}
    assert isinstance(order.total_amount, int)


def test_from_item_defaults_flags(make_item):
    item = make_item(3)
    del item["is_made"], item["is_served"]
    order = Order.from_item(item)
    assert not order.is_made and not order.is_served


@pytest.mark.parametrize("missing", ["order_number", "items", "total_amount", "timestamp"])
def test_from_item_rejects_incomplete_records(make_item, missing):
    item = make_item(3)
    del item[missing]
    assert Order.from_item(item) is None


def test_to_item_round_trips_wire_fields(make_item):
    order = Order.from_item(make_item(5))
    assert set(order.to_item()) == {
        "order_id", "order_number", "items", "total_amount",
        "timestamp", "is_made", "is_served",
    }


def test_display_names():
    assert OrderStatus.PENDING.display_name == "🔴 제조 전"
    assert OrderStatus.MADE.color == "orange"


def test_formatted_total(make_item):
    order = Order.from_item(make_item(1))
    assert order.formatted_total == "3,000원"
    assert order.as_dict()["formatted_total"] == "3,000원"
