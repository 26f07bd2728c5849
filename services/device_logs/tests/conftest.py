# services/device_logs/tests/conftest.py
import json
import types

import boto3
import pytest
from moto import mock_aws

from services.device_logs.crud import StorageError


@pytest.fixture
def lambda_context():
    """Fake AWS Lambda context for Powertools."""
    ctx = types.SimpleNamespace()
    ctx.function_name = "device-logs-test"
    ctx.memory_limit_in_mb = 128
    ctx.invoked_function_arn = "arn:aws:lambda:us-east-1:000000000000:function:device-logs-test"
    ctx.aws_request_id = "test-request-id"
    return ctx


class FakeLogStore:
    """Records every put(); optionally fails them all."""

    def __init__(self, fail=False):
        self.fail = fail
        self.records = []

    def put(self, record):
        if self.fail:
            raise StorageError("ProvisionedThroughputExceededException")
        self.records.append(record)
        return record.for_dynamodb()


@pytest.fixture
def fake_store():
    return FakeLogStore()


@pytest.fixture
def failing_store():
    return FakeLogStore(fail=True)


@pytest.fixture
def logs_table():
    """Fake DynamoDB Logs table keyed the way the service writes it."""
    with mock_aws():
        ddb = boto3.resource("dynamodb", region_name="us-east-1")
        table = ddb.create_table(
            TableName="Logs",
            KeySchema=[
                {"AttributeName": "Location", "KeyType": "HASH"},
                {"AttributeName": "CreatedAt", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "Location", "AttributeType": "S"},
                {"AttributeName": "CreatedAt", "AttributeType": "N"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        yield table


def url_event(method, body=None, is_base64=False):
    """Minimal Lambda function URL event."""
    event = {
        "version": "2.0",
        "rawPath": "/",
        "rawQueryString": "",
        "headers": {"content-type": "application/json"},
        "requestContext": {
            "accountId": "anonymous",
            "requestId": "req-1",
            "http": {
                "method": method,
                "path": "/",
                "protocol": "HTTP/1.1",
                "sourceIp": "127.0.0.1",
                "userAgent": "pytest",
            },
        },
        "isBase64Encoded": is_base64,
    }
    if body is not None:
        event["body"] = body if isinstance(body, str) else json.dumps(body)
    return event


@pytest.fixture
def make_url_event():
    return url_event
