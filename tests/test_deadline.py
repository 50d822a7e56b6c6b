from __future__ import annotations

import threading
import time

import pytest

from dynamodbx.deadline import Deadline
from dynamodbx.errors import DdbCancelled, DdbDeadlineExceeded


def test_never_does_not_expire():
    d = Deadline.never()
    assert d.remaining() is None
    assert not d.expired()
    d.check(operation="BatchWriteItem")


def test_after_negative_is_already_expired():
    d = Deadline.after(-1)
    assert d.expired()
    assert d.remaining() == 0.0
    with pytest.raises(DdbDeadlineExceeded) as ei:
        d.check(operation="DescribeTable", table_name="t")
    assert ei.value.operation == "DescribeTable"
    assert ei.value.table_name == "t"


def test_cancel_wins_over_expiry():
    d = Deadline.after(-1)
    d.cancel()
    with pytest.raises(DdbCancelled) as ei:
        d.check(operation="CreateTable")
    assert not isinstance(ei.value, DdbDeadlineExceeded)


def test_sleep_is_cut_short_by_deadline():
    d = Deadline.after(0.05)
    started = time.monotonic()
    with pytest.raises(DdbDeadlineExceeded):
        d.sleep(5, operation="DescribeTable")
    assert time.monotonic() - started < 2


def test_sleep_wakes_on_cancel_from_other_thread():
    d = Deadline.never()
    timer = threading.Timer(0.05, d.cancel)
    timer.start()
    started = time.monotonic()
    try:
        with pytest.raises(DdbCancelled):
            d.sleep(5, operation="BatchWriteItem")
    finally:
        timer.cancel()
    assert time.monotonic() - started < 2


def test_sleep_zero_only_checks():
    Deadline.never().sleep(0, operation="BatchWriteItem")
