"""Group call records into per-type buckets."""

from __future__ import annotations

from typing import Iterable

from models import CallRecord, CallType, CategorizedView


def categorize(
    records: Iterable[CallRecord],
    missing_type: CallType = CallType.UNKNOWN,
) -> CategorizedView:
    """Stable partition of ``records`` by call type.

    Records without a type land in ``missing_type``. Every CallType gets a
    bucket, empty or not, and ``all`` keeps the input order untouched.
    """
    ordered = tuple(records)
    grouped: dict[CallType, list[CallRecord]] = {call_type: [] for call_type in CallType}
    for record in ordered:
        grouped[record.call_type or missing_type].append(record)
    return CategorizedView(
        all=ordered,
        buckets={call_type: tuple(items) for call_type, items in grouped.items()},
    )
