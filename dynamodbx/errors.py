from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class DdbError(Exception):
    """Base error for dynamodbx operations.

    Errors raised by botocore itself (``ClientError``, ``BotoCoreError``) are
    never wrapped in these; they reach the caller unchanged.
    """

    message: str
    operation: str | None = None
    table_name: str | None = None
    retryable: bool = False
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class DdbValidation(DdbError):
    pass


@dataclass(slots=True)
class EmptyTableNameError(DdbValidation):
    message: str = "batch_put_request: table name cannot be empty"
    operation: str | None = "BatchPutRequest"


@dataclass(slots=True)
class NilRecordsError(DdbValidation):
    message: str = "batch_put_request: records cannot be None"
    operation: str | None = "BatchPutRequest"


@dataclass(slots=True)
class NotASequenceError(DdbValidation):
    message: str = "batch_put_request: records must be a sequence"
    operation: str | None = "BatchPutRequest"


@dataclass(slots=True)
class DdbThrottled(DdbError):
    pass


@dataclass(slots=True)
class DdbCancelled(DdbError):
    pass


@dataclass(slots=True)
class DdbDeadlineExceeded(DdbCancelled):
    pass
