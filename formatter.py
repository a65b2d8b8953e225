"""Display strings and style tags for call log rows."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from models import CallEntryView, CallRecord, CallType, StyleTag

UNKNOWN_TEXT = "Unknown"
UNKNOWN_NUMBER_TEXT = "Unknown number"
NO_DURATION_TEXT = "No duration"

# Fixed so that Qt's setlocale() on startup cannot change the output.
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_LABELS = {
    CallType.INCOMING: "Incoming",
    CallType.OUTGOING: "Outgoing",
    CallType.MISSED: "Missed",
    CallType.REJECTED: "Rejected",
    CallType.BLOCKED: "Blocked",
    CallType.VOICEMAIL: "Voicemail",
    CallType.UNKNOWN: UNKNOWN_TEXT,
}

_STYLES = {
    CallType.INCOMING: StyleTag(color="green", icon="received"),
    CallType.OUTGOING: StyleTag(color="blue", icon="made"),
    CallType.MISSED: StyleTag(color="red", icon="missed"),
    CallType.REJECTED: StyleTag(color="orange", icon="declined"),
    CallType.BLOCKED: StyleTag(color="purple", icon="blocked"),
    CallType.VOICEMAIL: StyleTag(color="teal", icon="voicemail"),
    CallType.UNKNOWN: StyleTag(color="grey", icon="call"),
}


def type_label(call_type: Optional[CallType]) -> str:
    return _LABELS.get(call_type or CallType.UNKNOWN, UNKNOWN_TEXT)


def type_style_tag(call_type: Optional[CallType]) -> StyleTag:
    return _STYLES.get(call_type or CallType.UNKNOWN, _STYLES[CallType.UNKNOWN])


def format_timestamp(timestamp_ms: Optional[int], now: datetime) -> str:
    """Render a call time relative to ``now``.

    The call time is converted into ``now``'s timezone; a naive ``now`` means
    the system local time.
    """
    if timestamp_ms is None:
        return UNKNOWN_TEXT
    try:
        moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=now.tzinfo)
    except (OverflowError, OSError, ValueError):
        return UNKNOWN_TEXT
    day = moment.date()
    today = now.date()
    if day == today:
        return f"Today, {_clock(moment)}"
    if day == today - timedelta(days=1):
        return f"Yesterday, {_clock(moment)}"
    return f"{_MONTHS[moment.month - 1]} {moment.day}, {moment.year} - {_clock(moment)}"


def format_duration(duration_sec: Optional[int]) -> str:
    if not duration_sec or duration_sec < 0:
        return NO_DURATION_TEXT
    hours, rem = divmod(int(duration_sec), 3600)
    minutes, seconds = divmod(rem, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def entry_title(record: CallRecord) -> str:
    if record.name:
        return record.name
    return record.number or UNKNOWN_TEXT


def entry_number_line(record: CallRecord) -> Optional[str]:
    """Second line under a named entry; unnamed entries already show the number."""
    if not record.name:
        return None
    return record.number or UNKNOWN_NUMBER_TEXT


def describe(record: CallRecord, now: datetime) -> CallEntryView:
    return CallEntryView(
        title=entry_title(record),
        number_line=entry_number_line(record),
        timestamp_text=format_timestamp(record.timestamp_ms, now),
        type_text=type_label(record.call_type),
        duration_text=format_duration(record.duration_sec),
        style=type_style_tag(record.call_type),
    )


def _clock(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"
