"""DynamoDB batch-write and table-creation helpers.

- ``batch_put_request``: records -> BatchWriteItem ``RequestItems``
- ``batch_write_item``: BatchWriteItem without the 25 item limit
- ``create_table_sync``: CreateTable that waits for ACTIVE
"""

from .batch_put import batch_put_request, serialize_item
from .batch_write import batch_write_item, batch_write_item_with_deadline
from .client import dynamodb_client
from .create_table import create_table_sync, create_table_sync_with_deadline
from .deadline import Deadline
from .errors import (
    DdbCancelled,
    DdbDeadlineExceeded,
    DdbError,
    DdbThrottled,
    DdbValidation,
    EmptyTableNameError,
    NilRecordsError,
    NotASequenceError,
)
from .retry import RetryPolicy

__all__ = [
    "batch_put_request",
    "serialize_item",
    "batch_write_item",
    "batch_write_item_with_deadline",
    "create_table_sync",
    "create_table_sync_with_deadline",
    "dynamodb_client",
    "Deadline",
    "RetryPolicy",
    "DdbError",
    "DdbValidation",
    "EmptyTableNameError",
    "NilRecordsError",
    "NotASequenceError",
    "DdbThrottled",
    "DdbCancelled",
    "DdbDeadlineExceeded",
]
