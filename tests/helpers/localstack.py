"""
Integration test helpers for lazyaws.

This module provides utilities for setting up and managing LocalStack
resources (DynamoDB tables, S3 buckets, SQS queues) during integration tests.
"""

from typing import Any

import boto3
from botocore.exceptions import ClientError


class LocalStackHelper:
    """
    Helper class for managing LocalStack resources in integration tests.

    Provides methods for creating tables, buckets and queues, seeding data,
    and cleaning up resources between tests.
    """

    def __init__(self, endpoint_url: str = "http://localhost:4566", region: str = "eu-south-1"):
        """Initialize LocalStack helper with connection details."""
        self.endpoint_url = endpoint_url
        self.region = region
        self.dynamodb = self._client("dynamodb")
        self.s3 = self._client("s3")
        self.sqs = self._client("sqs")

    def _client(self, service_name: str) -> Any:
        return boto3.client(
            service_name,
            endpoint_url=self.endpoint_url,
            region_name=self.region,
            aws_access_key_id="test",
            aws_secret_access_key="test",
        )

    # DynamoDB

    def create_table(
        self,
        table_name: str,
        pk_name: str,
        pk_type: str = "S",
        sk_name: str | None = None,
        sk_type: str = "S",
    ) -> None:
        """
        Create a DynamoDB table with the specified schema.

        Args:
            table_name: Name of the table to create
            pk_name: Partition key attribute name
            pk_type: Partition key attribute type (S, N, B)
            sk_name: Sort key attribute name (optional)
            sk_type: Sort key attribute type (S, N, B)
        """
        key_schema = [{"AttributeName": pk_name, "KeyType": "HASH"}]
        attr_defs = [{"AttributeName": pk_name, "AttributeType": pk_type}]

        if sk_name:
            key_schema.append({"AttributeName": sk_name, "KeyType": "RANGE"})
            attr_defs.append({"AttributeName": sk_name, "AttributeType": sk_type})

        try:
            self.dynamodb.create_table(
                TableName=table_name,
                KeySchema=key_schema,
                AttributeDefinitions=attr_defs,
                BillingMode="PAY_PER_REQUEST",
            )
        except ClientError as e:
            if e.response["Error"]["Code"] != "ResourceInUseException":
                raise
        # Table may already exist, just ensure it's active
        self.dynamodb.get_waiter("table_exists").wait(TableName=table_name)

    def delete_table(self, table_name: str) -> None:
        try:
            self.dynamodb.delete_table(TableName=table_name)
            self.dynamodb.get_waiter("table_not_exists").wait(TableName=table_name)
        except ClientError as e:
            if e.response["Error"]["Code"] != "ResourceNotFoundException":
                raise

    def put_items(self, table_name: str, items: list[dict[str, Any]]) -> None:
        """
        Put multiple items into a DynamoDB table.

        Args:
            table_name: Name of the table
            items: List of items in DynamoDB JSON format
        """
        for item in items:
            self.dynamodb.put_item(TableName=table_name, Item=item)

    # S3

    def create_bucket(self, bucket: str) -> None:
        try:
            self.s3.create_bucket(
                Bucket=bucket,
                CreateBucketConfiguration={"LocationConstraint": self.region},
            )
        except ClientError as e:
            if e.response["Error"]["Code"] not in (
                "BucketAlreadyOwnedByYou",
                "BucketAlreadyExists",
            ):
                raise

    def put_objects(self, bucket: str, keys: list[str]) -> None:
        for key in keys:
            self.s3.put_object(Bucket=bucket, Key=key, Body=key.encode("utf-8"))

    def delete_bucket(self, bucket: str) -> None:
        """Empties and deletes a bucket. Missing buckets are ignored."""
        try:
            paginator = self.s3.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=bucket):
                for obj in page.get("Contents", []):
                    self.s3.delete_object(Bucket=bucket, Key=obj["Key"])
            self.s3.delete_bucket(Bucket=bucket)
        except ClientError as e:
            if e.response["Error"]["Code"] != "NoSuchBucket":
                raise

    # SQS

    def create_queues(self, names: list[str]) -> list[str]:
        """Creates the queues and returns their urls."""
        return [self.sqs.create_queue(QueueName=name)["QueueUrl"] for name in names]

    def delete_queues(self, urls: list[str]) -> None:
        for url in urls:
            try:
                self.sqs.delete_queue(QueueUrl=url)
            except ClientError as e:
                if e.response["Error"]["Code"] not in (
                    "AWS.SimpleQueueService.NonExistentQueue",
                    "QueueDoesNotExist",
                ):
                    raise


def python_to_dynamo_json(item: dict[str, Any]) -> dict[str, Any]:
    """
    Convert Python types to DynamoDB JSON format.

    Args:
        item: Item with Python types (str, bool, int, float)

    Returns:
        Item in DynamoDB JSON format
    """
    result: dict[str, Any] = {}

    for key, value in item.items():
        if isinstance(value, str):
            result[key] = {"S": value}
        elif isinstance(value, bool):
            result[key] = {"BOOL": value}
        elif isinstance(value, (int, float)):
            result[key] = {"N": str(value)}
        else:
            result[key] = {"S": str(value)}

    return result
