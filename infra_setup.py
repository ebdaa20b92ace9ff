# infra_setup.py
from botocore.exceptions import ClientError

from aws_config import (
    COUNTERS_KEY,
    COUNTERS_TABLE,
    ORDERS_KEY,
    ORDERS_TABLE,
    dynamodb_resource,
)

ddb = dynamodb_resource()


# --- DynamoDB Tables ---
def create_table(table_name, partition_key):
    """Create a DynamoDB table if it doesn't exist."""
    try:
        table = ddb.Table(table_name)
        table.load()
        print(f"Table '{table_name}' already exists.")
    except ClientError as e:
        if e.response["Error"]["Code"] != "ResourceNotFoundException":
            raise
        table = ddb.create_table(
            TableName=table_name,
            AttributeDefinitions=[{"AttributeName": partition_key, "AttributeType": "S"}],
            KeySchema=[{"AttributeName": partition_key, "KeyType": "HASH"}],
            BillingMode="PAY_PER_REQUEST"
        )
        table.wait_until_exists()
        print(f"Created table '{table_name}' successfully.")
    return table


# --- Main setup ---
if __name__ == "__main__":
    create_table(ORDERS_TABLE, ORDERS_KEY)
    create_table(COUNTERS_TABLE, COUNTERS_KEY)

    print("\nInfrastructure setup completed successfully.")
    print(f"Orders table: {ORDERS_TABLE}")
    print(f"Counters table: {COUNTERS_TABLE}")
