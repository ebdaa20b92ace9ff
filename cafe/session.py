from aws_config import COUNTERS_TABLE, ORDERS_TABLE
from aws_lib.dynamodb_client import DynamoDBClient

from .counter import OrderCounter
from .feeds import DEFAULT_INTERVAL, ConnectionMonitor, OrderFeed
from .services import OrderService


class CafeSession:
    """
    Everything both screens need to talk to DynamoDB.

    Built once by the composition root (``CafeConfig.ready``) and handed
    to the views; tests build their own around an in-memory store.
    """

    def __init__(self, store, orders_table=ORDERS_TABLE,
                 counters_table=COUNTERS_TABLE, poll_interval=DEFAULT_INTERVAL):
        self.store = store
        self.counter = OrderCounter(store, table=counters_table)
        self.orders = OrderService(store, self.counter, table=orders_table)
        self.connection = ConnectionMonitor(store, orders_table, interval=poll_interval)
        self.feed = OrderFeed(self.orders, interval=poll_interval)

    @classmethod
    def from_settings(cls, settings):
        store = DynamoDBClient()
        return cls(
            store,
            orders_table=getattr(settings, "CAFE_ORDERS_TABLE", ORDERS_TABLE),
            counters_table=getattr(settings, "CAFE_COUNTERS_TABLE", COUNTERS_TABLE),
            poll_interval=getattr(settings, "CAFE_POLL_INTERVAL", DEFAULT_INTERVAL),
        )

    def close(self):
        self.connection.stop(join=True)
        self.feed.stop(join=True)
