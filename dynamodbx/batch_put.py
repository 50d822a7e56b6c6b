from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from boto3.dynamodb.types import TypeSerializer
from pydantic import BaseModel

from .errors import EmptyTableNameError, NilRecordsError, NotASequenceError


_serializer = TypeSerializer()


def _record_to_mapping(record: Any) -> Mapping[str, Any]:
    if isinstance(record, Mapping):
        return record
    if isinstance(record, BaseModel):
        return record.model_dump()
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return dataclasses.asdict(record)
    raise TypeError(f"Unsupported record type for DynamoDB marshaling: {type(record).__name__}")


def _normalize(value: Any) -> Any:
    # TypeSerializer refuses floats (DynamoDB numbers are decimals) and tuples.
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {k: _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return {_normalize(v) for v in value}
    return value


def serialize_item(record: Any) -> dict[str, Any]:
    """Marshal one record into the low-level client AttributeValue shape.

    ``{"Foo": "a", "Bar": 1}`` becomes ``{"Foo": {"S": "a"}, "Bar": {"N": "1"}}``.
    """
    data = _record_to_mapping(record)
    return {k: _serializer.serialize(_normalize(v)) for k, v in data.items()}


def batch_put_request(table_name: str, records: Sequence[Any]) -> dict[str, list[dict[str, Any]]]:
    """
    Build the ``RequestItems`` mapping of a BatchWriteItem call from records.

    Every record becomes one ``PutRequest``; order is preserved. The result may
    hold far more than the 25 writes DynamoDB accepts per call, it is meant to
    be handed to ``batch_write_item`` which splits it into chunks.

    Records may be mappings, dataclass instances or pydantic models.
    """
    if not str(table_name or "").strip():
        raise EmptyTableNameError()
    if records is None:
        raise NilRecordsError()
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes, bytearray)):
        raise NotASequenceError(table_name=table_name)

    reqs: list[dict[str, Any]] = []
    for record in records:
        reqs.append({"PutRequest": {"Item": serialize_item(record)}})
    return {table_name: reqs}
