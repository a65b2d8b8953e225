from __future__ import annotations

import pytest

from errors import ERROR_MESSAGES, PERMISSION_DENIED
from models import CallLogTab, CallRecord, CallType, LoadState, LoadStatus


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1", CallType.INCOMING),
        ("2", CallType.OUTGOING),
        ("3", CallType.MISSED),
        ("4", CallType.VOICEMAIL),
        ("5", CallType.REJECTED),
        ("6", CallType.BLOCKED),
        (3, CallType.MISSED),
        ("7", CallType.UNKNOWN),
        ("Outgoing", CallType.OUTGOING),
        ("voicemail", CallType.VOICEMAIL),
        ("bogus", CallType.UNKNOWN),
        (CallType.BLOCKED, CallType.BLOCKED),
        (None, None),
        ("", None),
        ("NULL", None),
    ],
)
def test_call_type_parse(raw: object, expected: CallType | None) -> None:
    assert CallType.parse(raw) is expected


def test_tab_call_types() -> None:
    assert CallLogTab.ALL.call_type is None
    assert CallLogTab.INCOMING.call_type is CallType.INCOMING
    assert CallLogTab.REJECTED.call_type is CallType.REJECTED
    assert CallLogTab("Missed") is CallLogTab.MISSED


def test_call_record_is_immutable_value() -> None:
    record = CallRecord(number="+15550100", duration_sec=3)

    assert record == CallRecord(number="+15550100", duration_sec=3)
    with pytest.raises(AttributeError):
        record.number = "+15550199"  # type: ignore[misc]


def test_load_state_constructors() -> None:
    failed = LoadState.failed(PERMISSION_DENIED, ERROR_MESSAGES[PERMISSION_DENIED])

    assert LoadState.loading().status == LoadStatus.LOADING
    assert failed.status == LoadStatus.FAILED
    assert failed.view is None
    assert failed.reason == "Phone permission is required to access call logs."
