from dataclasses import dataclass, field

from .models import OrderStatus


@dataclass
class Board:
    """Kitchen screen columns."""

    pending: list = field(default_factory=list)
    made: list = field(default_factory=list)
    served: list = field(default_factory=list)

    def column(self, status):
        return {
            OrderStatus.PENDING: self.pending,
            OrderStatus.MADE: self.made,
            OrderStatus.SERVED: self.served,
        }[status]

    def columns(self):
        return [(status, self.column(status)) for status in OrderStatus]

    def counts(self):
        return {status.value: len(self.column(status)) for status in OrderStatus}

    def as_dict(self):
        return {
            status.value: [o.as_dict() for o in orders]
            for status, orders in self.columns()
        }


def build_board(orders):
    """
    Partition orders by status.

    Pending and made are oldest first; served is most recent first.
    """
    board = Board()
    for order in orders:
        board.column(order.status).append(order)

    board.pending.sort(key=lambda o: o.order_number)
    board.made.sort(key=lambda o: o.order_number)
    board.served.sort(key=lambda o: o.order_number, reverse=True)
    return board
