import logging
import time

from boto3.dynamodb.conditions import Attr

from aws_config import ORDERS_KEY, ORDERS_TABLE
from aws_lib.dynamodb_client import ConditionFailed, StoreError

from .board import build_board
from .menu import clean_cart, total
from .models import STATUS_FLAGS, InvalidTransition, Order, OrderStatus, advance

logger = logging.getLogger(__name__)


class EmptyOrder(ValueError):
    """Submitted cart has no items."""


class OrderNotFound(LookupError):
    pass


def now_millis():
    return int(time.time() * 1000)


def _unset(flag):
    # Items written without the flag count as false.
    return Attr(flag).not_exists() | Attr(flag).eq(False)


class OrderService:
    """
    Order submission and status flows over the Orders table.

    Both tablets talk to the same table; nothing here is cached between
    calls.
    """

    def __init__(self, store, counter, table=ORDERS_TABLE):
        self.store = store
        self.counter = counter
        self.table = table

    def _key(self, order_number):
        return {ORDERS_KEY: str(order_number)}

    # -- submission --

    def place_order(self, cart):
        """
        Price the cart, allocate the next order number and write the order.

        Raises EmptyOrder for a cart without items, ValueError for unknown
        items and StoreError when DynamoDB fails.
        """
        items = clean_cart(cart)
        if not items:
            raise EmptyOrder("주문할 상품을 선택해주세요!")

        amount = total(items)
        number = self.counter.next_order_number()
        order = Order(
            order_id=str(number),
            order_number=number,
            items=items,
            total_amount=amount,
            timestamp=now_millis(),
        )

        try:
            self.store.put(
                self.table,
                order.to_item(),
                condition=Attr(ORDERS_KEY).not_exists(),
            )
        except StoreError:
            # The counter has already moved on; the number stays unused.
            logger.error("Order number %s allocated but the order was not saved", number)
            raise

        logger.info("Order %s placed: %s, %s won", number, items, amount)
        return order

    # -- status --

    def list_orders(self):
        orders = []
        for item in self.store.scan(self.table):
            order = Order.from_item(item)
            if order is not None:
                orders.append(order)
        return orders

    def board(self):
        return build_board(self.list_orders())

    def get_order(self, order_number):
        item = self.store.get(self.table, self._key(order_number))
        order = Order.from_item(item) if item else None
        if order is None:
            raise OrderNotFound(f"{order_number}번 주문을 찾을 수 없습니다.")
        return order

    def advance(self, order_number, target):
        """
        Move an order one step along pending -> made -> served.

        The write is conditional on the flags still matching the status
        read here, so a concurrent change from the other tablet raises
        InvalidTransition instead of being overwritten.
        """
        target = OrderStatus(target)
        order = self.get_order(order_number)
        advance(order.status, target)

        if target is OrderStatus.MADE:
            condition = _unset("is_made") & _unset("is_served")
        else:
            condition = Attr("is_made").eq(True) & _unset("is_served")

        try:
            updated = self.store.set_attribute(
                self.table,
                self._key(order_number),
                STATUS_FLAGS[target],
                True,
                condition=condition,
            )
        except ConditionFailed as e:
            raise InvalidTransition(
                f"{order_number}번 주문 상태가 이미 변경되었습니다."
            ) from e

        logger.info("Order %s marked %s", order_number, target.value)
        return Order.from_item(updated)

    def mark_made(self, order_number):
        return self.advance(order_number, OrderStatus.MADE)

    def mark_served(self, order_number):
        return self.advance(order_number, OrderStatus.SERVED)
