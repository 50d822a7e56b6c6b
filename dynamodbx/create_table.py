from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .deadline import Deadline
from .observability.logging import get_logger
from .settings import settings

log = get_logger("dynamodbx.create_table")

TABLE_STATUS_ACTIVE = "ACTIVE"


def _create_table_sync(
    client: Any,
    request: Mapping[str, Any],
    *,
    deadline: Deadline,
    poll_interval_s: float | None,
) -> dict[str, Any]:
    table_name = str(request.get("TableName") or "")
    interval = settings.create_table_poll_interval_s if poll_interval_s is None else float(poll_interval_s)

    deadline.check(operation="CreateTable", table_name=table_name)
    out = client.create_table(**request)

    polls = 0
    while True:
        deadline.check(operation="DescribeTable", table_name=table_name)
        desc = client.describe_table(TableName=table_name)
        polls += 1
        status = (desc.get("Table") or {}).get("TableStatus")
        if status == TABLE_STATUS_ACTIVE:
            break
        deadline.sleep(interval, operation="DescribeTable", table_name=table_name)

    log.info("ddb_create_table_active", table_name=table_name, polls=polls)
    return out


def create_table_sync(
    client: Any,
    request: Mapping[str, Any],
    *,
    poll_interval_s: float | None = None,
) -> dict[str, Any]:
    """
    Create a DynamoDB table and block until it is ACTIVE.

    Useful in code that writes to a freshly created table right away, and in
    tests. Returns the CreateTable response.

    There is no cap on the number of polls: if the table never reaches ACTIVE
    this never returns. Use ``create_table_sync_with_deadline`` to bound it.
    """
    return _create_table_sync(client, request, deadline=Deadline.never(), poll_interval_s=poll_interval_s)


def create_table_sync_with_deadline(
    deadline: Deadline,
    client: Any,
    request: Mapping[str, Any],
    *,
    poll_interval_s: float | None = None,
) -> dict[str, Any]:
    """
    Same as ``create_table_sync`` but raises ``DdbDeadlineExceeded`` /
    ``DdbCancelled`` once ``deadline`` fires, whether before CreateTable or
    while polling.
    """
    return _create_table_sync(client, request, deadline=deadline, poll_interval_s=poll_interval_s)
