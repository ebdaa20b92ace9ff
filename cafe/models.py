"""
Order records as stored in the DynamoDB ``Orders`` table.

Orders do not go through the Django ORM; the table item is the source of
truth and ``Order`` is a parsed, read-only view of one item.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .menu import format_won

logger = logging.getLogger(__name__)


class InvalidTransition(Exception):
    """Status change that does not follow pending -> made -> served."""


class OrderStatus(Enum):
    PENDING = "pending"
    MADE = "made"
    SERVED = "served"

    @property
    def display_name(self):
        return {
            OrderStatus.PENDING: "🔴 제조 전",
            OrderStatus.MADE: "🟡 제조 완료",
            OrderStatus.SERVED: "🟢 서빙 완료",
        }[self]

    @property
    def color(self):
        return {
            OrderStatus.PENDING: "red",
            OrderStatus.MADE: "orange",
            OrderStatus.SERVED: "green",
        }[self]

    @property
    def next(self):
        return _NEXT.get(self)


_NEXT = {
    OrderStatus.PENDING: OrderStatus.MADE,
    OrderStatus.MADE: OrderStatus.SERVED,
}

# Boolean attribute flipped when entering each status
STATUS_FLAGS = {
    OrderStatus.MADE: "is_made",
    OrderStatus.SERVED: "is_served",
}


def advance(current, target):
    """
    Return ``target`` if it directly follows ``current``.

    Raises InvalidTransition for skips, repeats and back-transitions.
    """
    if current.next is not target:
        raise InvalidTransition(
            f"{current.display_name} 상태에서 {target.display_name} 상태로 바꿀 수 없습니다."
        )
    return target


@dataclass(frozen=True)
class Order:
    order_id: str
    order_number: int
    items: dict = field(default_factory=dict)
    total_amount: int = 0
    timestamp: int = 0  # epoch millis
    is_made: bool = False
    is_served: bool = False

    @property
    def status(self):
        # Legacy records may carry is_served without is_made; served wins.
        if self.is_served:
            return OrderStatus.SERVED
        if self.is_made:
            return OrderStatus.MADE
        return OrderStatus.PENDING

    @property
    def formatted_time(self):
        return datetime.fromtimestamp(self.timestamp / 1000).strftime("%H:%M")

    @property
    def formatted_total(self):
        return format_won(self.total_amount)

    @property
    def sorted_items(self):
        return sorted(self.items.items())

    @classmethod
    def from_item(cls, item):
        """
        Build an Order from a deserialized table item.

        Returns None when a required attribute is missing or malformed.
        """
        try:
            order_number = int(item["order_number"])
            items = {str(k): int(v) for k, v in item["items"].items()}
            total_amount = int(item["total_amount"])
            timestamp = int(item["timestamp"])
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("Skipping malformed order item: %r", item.get("order_id"))
            return None

        return cls(
            order_id=str(item.get("order_id", order_number)),
            order_number=order_number,
            items=items,
            total_amount=total_amount,
            timestamp=timestamp,
            is_made=bool(item.get("is_made", False)),
            is_served=bool(item.get("is_served", False)),
        )

    def to_item(self):
        return {
            "order_id": self.order_id,
            "order_number": self.order_number,
            "items": dict(self.items),
            "total_amount": self.total_amount,
            "timestamp": self.timestamp,
            "is_made": self.is_made,
            "is_served": self.is_served,
        }

    def as_dict(self):
        data = self.to_item()
        data["status"] = self.status.value
        data["formatted_time"] = self.formatted_time
        data["formatted_total"] = self.formatted_total
        return data
