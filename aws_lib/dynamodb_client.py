import logging
from contextlib import contextmanager
from decimal import Decimal

from botocore.exceptions import BotoCoreError, ClientError

from aws_config import AWS_REGION, DYNAMODB_ENDPOINT_URL

from .base_client import AWSBaseClient

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A DynamoDB operation failed. ``str(err)`` is safe to show to staff."""


class ConditionFailed(StoreError):
    """A conditional write was rejected by DynamoDB."""


@contextmanager
def _store_errors(action, table):
    try:
        yield
    except ClientError as e:
        code = e.response.get("Error", {}).get("Code", "")
        message = e.response.get("Error", {}).get("Message", str(e))
        if code == "ConditionalCheckFailedException":
            raise ConditionFailed(f"{action} rejected on {table}: {message}") from e
        logger.error("DynamoDB %s on %s failed: %s %s", action, table, code, message)
        raise StoreError(f"{action} failed on {table}: {message}") from e
    except BotoCoreError as e:
        logger.error("DynamoDB %s on %s failed: %s", action, table, e)
        raise StoreError(f"{action} failed on {table}: {e}") from e


class DynamoDBClient(AWSBaseClient):
    def __init__(self, region_name=AWS_REGION, endpoint_url=DYNAMODB_ENDPOINT_URL):
        super().__init__("dynamodb", region_name=region_name, endpoint_url=endpoint_url)

    def _deserialize(self, value):
        """Convert DynamoDB data into plain Python types."""
        if isinstance(value, dict):
            return {k: self._deserialize(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._deserialize(v) for v in value]
        if isinstance(value, Decimal):
            return int(value) if value % 1 == 0 else float(value)
        return value

    # int to decimal
    def _convert_to_decimal(self, data):
        """Recursively convert ints to Decimal for DynamoDB writes."""
        if isinstance(data, dict):
            return {k: self._convert_to_decimal(v) for k, v in data.items()}
        if isinstance(data, list):
            return [self._convert_to_decimal(v) for v in data]
        # bool is an int subclass but must stay a DynamoDB BOOL
        if isinstance(data, bool):
            return data
        if isinstance(data, int):
            return Decimal(data)
        return data

# CRUD

    def put(self, table, item, condition=None):
        """
        Write a whole item. ``condition`` is an optional
        boto3.dynamodb.conditions expression; a failed condition raises
        ConditionFailed.
        """
        tbl = self.resource.Table(table)
        kwargs = {"Item": self._convert_to_decimal(item)}
        if condition is not None:
            kwargs["ConditionExpression"] = condition
        with _store_errors("put", table):
            return tbl.put_item(**kwargs)

    def get(self, table, key):
        tbl = self.resource.Table(table)
        with _store_errors("get", table):
            resp = tbl.get_item(Key=key, ConsistentRead=True)
        item = resp.get("Item")
        return self._deserialize(item) if item else {}

    def scan(self, table):
        """Return every item in the table, following pagination."""
        tbl = self.resource.Table(table)
        items = []
        kwargs = {}
        with _store_errors("scan", table):
            while True:
                resp = tbl.scan(**kwargs)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        return [self._deserialize(i) for i in items]

    def delete(self, table, key):
        """
        Delete an item from the DynamoDB table.
        """
        tbl = self.resource.Table(table)
        with _store_errors("delete", table):
            return tbl.delete_item(Key=key)

    def increment(self, table, key, attribute="value", amount=1):
        """
        Atomically add ``amount`` to a numeric attribute and return the
        new value. A missing item or attribute counts as 0, so the first
        call returns ``amount``.
        """
        tbl = self.resource.Table(table)
        with _store_errors("increment", table):
            resp = tbl.update_item(
                Key=key,
                UpdateExpression="ADD #attr :amount",
                ExpressionAttributeNames={"#attr": attribute},
                ExpressionAttributeValues={":amount": Decimal(amount)},
                ReturnValues="UPDATED_NEW",
            )
        return self._deserialize(resp["Attributes"][attribute])

    def set_attribute(self, table, key, attribute, value, condition=None):
        """
        SET a single attribute on an existing item and return the item as
        stored after the write.
        """
        tbl = self.resource.Table(table)
        kwargs = {
            "Key": key,
            "UpdateExpression": "SET #attr = :value",
            "ExpressionAttributeNames": {"#attr": attribute},
            "ExpressionAttributeValues": {":value": self._convert_to_decimal(value)},
            "ReturnValues": "ALL_NEW",
        }
        if condition is not None:
            kwargs["ConditionExpression"] = condition
        with _store_errors("update", table):
            resp = tbl.update_item(**kwargs)
        return self._deserialize(resp.get("Attributes", {}))

    def ping(self, table):
        """Return True when the table answers a DescribeTable call."""
        try:
            with _store_errors("describe", table):
                status = self.client.describe_table(TableName=table)["Table"]["TableStatus"]
        except StoreError:
            return False
        return status in ("ACTIVE", "UPDATING")
