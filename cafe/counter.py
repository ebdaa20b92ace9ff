import logging

from aws_config import COUNTERS_KEY, COUNTERS_TABLE, ORDER_COUNTER_NAME

logger = logging.getLogger(__name__)


class OrderCounter:
    """
    Shared source of sequential order numbers.

    The counter is a single item in the Counters table. Every allocation
    is one atomic ADD on the server, so two tablets ordering at the same
    moment never receive the same number.
    """

    def __init__(self, store, table=COUNTERS_TABLE, name=ORDER_COUNTER_NAME):
        self.store = store
        self.table = table
        self.name = name

    @property
    def key(self):
        return {COUNTERS_KEY: self.name}

    def next_order_number(self):
        number = self.store.increment(self.table, self.key, "value", 1)
        logger.debug("Allocated order number %s", number)
        return number

    def current(self):
        item = self.store.get(self.table, self.key)
        return item.get("value", 0) if item else 0

    def reset(self, value=0):
        self.store.put(self.table, {COUNTERS_KEY: self.name, "value": value})
        logger.info("Order counter %s reset to %s", self.name, value)
