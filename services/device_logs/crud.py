# services/device_logs/crud.py

import os
from typing import Any, Optional

from boto3.resources.base import ServiceResource
from botocore.exceptions import BotoCoreError, ClientError

from services.device_logs.config import get_region
from services.device_logs.models import LogRecord

DEFAULT_LOGS_TABLE_NAME = "Logs"


class StorageError(Exception):
    """The log table rejected or never received a write."""


def get_logs_table_name() -> str:
    return os.getenv("LOGS_TABLE_NAME", DEFAULT_LOGS_TABLE_NAME)


class DynamoLogStore:
    """
    Writes LogRecords to the Logs table.
    The table handle is resolved once and reused by every put().
    """

    def __init__(self, table: Any = None, dynamodb: Optional[ServiceResource] = None):
        if table is None:
            if dynamodb is None:
                import boto3
                dynamodb = boto3.resource("dynamodb", region_name=get_region())
            table = dynamodb.Table(get_logs_table_name())
        self.table = table

    def put(self, record: LogRecord) -> dict:
        item = record.for_dynamodb()
        try:
            self.table.put_item(Item=item)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(str(e)) from e
        return item
