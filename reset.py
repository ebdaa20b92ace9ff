import argparse

from aws_config import COUNTERS_TABLE, ORDERS_KEY, ORDERS_TABLE
from aws_lib.dynamodb_client import DynamoDBClient
from cafe.counter import OrderCounter


def clear_orders(ddb, table_name=ORDERS_TABLE):
    """Delete every order; returns how many were removed."""
    orders = ddb.scan(table_name)
    for order in orders:
        ddb.delete(table_name, {ORDERS_KEY: order[ORDERS_KEY]})
    return len(orders)


def main(argv=None, ddb=None):
    parser = argparse.ArgumentParser(description="Start a new business day: clear orders and reset the counter.")
    parser.add_argument("--keep-orders", action="store_true", help="only reset the order counter")
    parser.add_argument("--counter", type=int, default=0, help="value to reset the counter to (default: 0)")
    args = parser.parse_args(argv)

    ddb = ddb or DynamoDBClient()

    if not args.keep_orders:
        print(f"Clearing table: {ORDERS_TABLE}")
        removed = clear_orders(ddb, ORDERS_TABLE)
        print(f"✅ Cleared {removed} orders from {ORDERS_TABLE}")

    OrderCounter(ddb, table=COUNTERS_TABLE).reset(args.counter)
    print(f"✅ Order counter reset to {args.counter}; next order is #{args.counter + 1}")


if __name__ == "__main__":
    main()
