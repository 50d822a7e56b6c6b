from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .deadline import Deadline
from .errors import DdbThrottled, DdbValidation
from .observability.logging import get_logger
from .retry import RetryPolicy, backoff_delay
from .settings import settings

log = get_logger("dynamodbx.batch_write")

_OPERATION = "BatchWriteItem"
_REQUEST_KEYS = ("RequestItems", "ReturnConsumedCapacity", "ReturnItemCollectionMetrics")


def _count(items: Mapping[str, Sequence[Any]]) -> int:
    return sum(len(v or []) for v in items.values())


def _coalesce_consumed_capacity(entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
    # One entry per table, first-seen order.
    totals: dict[str, float] = {}
    for entry in entries:
        name = entry.get("TableName")
        if not name:
            continue
        totals[name] = totals.get(name, 0.0) + float(entry.get("CapacityUnits") or 0)
    return [{"TableName": name, "CapacityUnits": units} for name, units in totals.items()]


class _Accumulator:
    def __init__(self) -> None:
        self.consumed_capacity: list[dict[str, Any]] = []
        self.item_collection_metrics: dict[str, list[dict[str, Any]]] = {}

    def add(self, resp: dict[str, Any]) -> None:
        self.consumed_capacity.extend(resp.get("ConsumedCapacity") or [])
        for table_name, metrics in (resp.get("ItemCollectionMetrics") or {}).items():
            self.item_collection_metrics.setdefault(table_name, []).extend(metrics or [])

    def result(self) -> dict[str, Any]:
        return {
            "ConsumedCapacity": _coalesce_consumed_capacity(self.consumed_capacity),
            "ItemCollectionMetrics": self.item_collection_metrics,
            "UnprocessedItems": {},
        }


def _write_table(
    client: Any,
    *,
    table_name: str,
    items: Sequence[dict[str, Any]],
    passthrough: dict[str, Any],
    acc: _Accumulator,
    deadline: Deadline,
    policy: RetryPolicy,
    max_items: int,
) -> None:
    chunk_size = max_items
    carry: dict[str, list[dict[str, Any]]] = {}
    i = 0
    chunks = 0
    attempt = 0
    stalled = 0

    while i < len(items) or carry:
        window = list(items[i : i + chunk_size])
        i += len(window)

        batch: dict[str, list[dict[str, Any]]] = {table_name: window}
        for k, v in carry.items():
            batch.setdefault(k, []).extend(v)
        batch = {k: v for k, v in batch.items() if v}
        carry = {}
        # Carry-over is in this batch now; only the window after a rejection shrinks.
        chunk_size = max_items

        submitted = _count(batch)
        deadline.check(operation=_OPERATION, table_name=table_name)
        resp = client.batch_write_item(RequestItems=batch, **passthrough)
        chunks += 1
        acc.add(resp)

        unprocessed = {k: list(v) for k, v in (resp.get("UnprocessedItems") or {}).items() if v}
        n = _count(unprocessed)
        log.debug(
            "ddb_batch_write_chunk",
            table_name=table_name,
            chunk=chunks,
            submitted=submitted,
            unprocessed=n,
        )
        if n == 0:
            attempt = 0
            stalled = 0
            continue

        carry = unprocessed
        # Never below zero: a zero-size window resubmits the carry-over alone.
        chunk_size = max(0, max_items - n)
        attempt += 1
        stalled = stalled + 1 if n >= submitted else 0
        log.info(
            "ddb_batch_write_unprocessed",
            table_name=table_name,
            chunk=chunks,
            submitted=submitted,
            unprocessed=n,
            next_window=min(chunk_size, len(items) - i),
        )
        if stalled >= policy.max_attempts:
            raise DdbThrottled(
                message=f"DynamoDB left {n} writes unprocessed after {stalled} attempts",
                operation=_OPERATION,
                table_name=table_name,
                retryable=True,
            )
        deadline.sleep(backoff_delay(policy, attempt), operation=_OPERATION, table_name=table_name)


def _validate_request(request: Mapping[str, Any]) -> None:
    # A bare table -> writes mapping (eg batch_put_request output) must be wrapped in RequestItems.
    unknown = sorted(str(k) for k in request if k not in _REQUEST_KEYS)
    if unknown or "RequestItems" not in request:
        raise DdbValidation(
            message=(
                "batch_write_item: request must be a BatchWriteItem input with RequestItems"
                f" (unexpected keys: {unknown})"
            ),
            operation=_OPERATION,
        )
    if not isinstance(request["RequestItems"], Mapping):
        raise DdbValidation(message="batch_write_item: RequestItems must be a mapping", operation=_OPERATION)


def _batch_write_item(
    client: Any,
    request: Mapping[str, Any],
    *,
    deadline: Deadline,
    retry_policy: RetryPolicy | None,
) -> dict[str, Any]:
    _validate_request(request)
    policy = retry_policy or RetryPolicy()
    max_items = settings.batch_write_max_items
    passthrough: dict[str, Any] = {}
    for k in ("ReturnConsumedCapacity", "ReturnItemCollectionMetrics"):
        if request.get(k):
            passthrough[k] = request[k]

    acc = _Accumulator()
    for table_name, items in request["RequestItems"].items():
        _write_table(
            client,
            table_name=table_name,
            items=list(items or []),
            passthrough=passthrough,
            acc=acc,
            deadline=deadline,
            policy=policy,
            max_items=max_items,
        )
    return acc.result()


def batch_write_item(
    client: Any,
    request: Mapping[str, Any],
    *,
    retry_policy: RetryPolicy | None = None,
) -> dict[str, Any]:
    """
    Drop-in replacement for ``client.batch_write_item(**request)`` without the
    25 item limit.

    ``request`` is the BatchWriteItem input (``RequestItems`` plus the optional
    ``ReturnConsumedCapacity`` / ``ReturnItemCollectionMetrics``). Each table's
    writes are sent in chunks of at most 25; writes DynamoDB hands back as
    unprocessed ride along with the next chunk, which shrinks to make room.

    Returns the aggregated response: ``ConsumedCapacity`` summed into one entry
    per table and ``ItemCollectionMetrics`` concatenated per table. Any botocore
    error aborts the whole call and is raised unchanged; chunks sent before it
    stay written. A request without ``RequestItems`` (or with any other key)
    raises ``DdbValidation`` before any call is made.
    """
    return _batch_write_item(client, request, deadline=Deadline.never(), retry_policy=retry_policy)


def batch_write_item_with_deadline(
    deadline: Deadline,
    client: Any,
    request: Mapping[str, Any],
    *,
    retry_policy: RetryPolicy | None = None,
) -> dict[str, Any]:
    """
    Same as ``batch_write_item`` but stops issuing calls once ``deadline``
    expires or is cancelled, raising ``DdbDeadlineExceeded`` / ``DdbCancelled``.
    """
    return _batch_write_item(client, request, deadline=deadline, retry_policy=retry_policy)
