# aws_config.py
import os

import boto3
from botocore.config import Config

# -----------------------------
# AWS region & boto3 config
# -----------------------------
AWS_REGION = os.getenv("AWS_REGION", "ap-northeast-2")

# Point at DynamoDB Local while developing, e.g. http://localhost:8000
DYNAMODB_ENDPOINT_URL = os.getenv("DYNAMODB_ENDPOINT_URL") or None

boto3_config = Config(
    region_name=AWS_REGION,
    retries={"max_attempts": 3, "mode": "standard"}
)

# -----------------------------
# DynamoDB tables
# -----------------------------
ORDERS_TABLE = os.getenv("DDB_ORDERS_TABLE", "Orders")
COUNTERS_TABLE = os.getenv("DDB_COUNTERS_TABLE", "Counters")

ORDERS_KEY = "order_id"
COUNTERS_KEY = "counter_name"
ORDER_COUNTER_NAME = "order_counter"


def dynamodb_resource():
    return boto3.resource(
        "dynamodb",
        region_name=AWS_REGION,
        endpoint_url=DYNAMODB_ENDPOINT_URL,
        config=boto3_config,
    )
