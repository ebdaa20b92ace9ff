from cafe.board import build_board
from cafe.models import Order


def orders_from(make_item, specs):
    return [Order.from_item(make_item(n, made=m, served=s)) for n, m, s in specs]


def numbers(orders):
    return [o.order_number for o in orders]


def test_each_order_lands_in_exactly_one_column(make_item):
    board = build_board(orders_from(make_item, [
        (1, False, False),
        (2, True, False),
        (3, True, True),
        (4, False, True),
    ]))
    assert numbers(board.pending) == [1]
    assert numbers(board.made) == [2]
    assert sorted(numbers(board.served)) == [3, 4]


def test_pending_and_made_are_oldest_first(make_item):
    board = build_board(orders_from(make_item, [
        (5, False, False), (2, False, False), (9, True, False), (4, True, False),
    ]))
    assert numbers(board.pending) == [2, 5]
    assert numbers(board.made) == [4, 9]


def test_served_is_most_recent_first(make_item):
    board = build_board(orders_from(make_item, [
        (3, True, True), (1, True, True), (2, True, True),
    ]))
    assert numbers(board.served) == [3, 2, 1]


def test_counts_and_json_shape(make_item):
    board = build_board(orders_from(make_item, [(1, False, False), (2, True, True)]))
    assert board.counts() == {"pending": 1, "made": 0, "served": 1}
    data = board.as_dict()
    assert data["pending"][0]["order_number"] == 1
    assert data["served"][0]["status"] == "served"


def test_empty_board():
    board = build_board([])
    assert board.counts() == {"pending": 0, "made": 0, "served": 0}
