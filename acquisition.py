"""Permission-gated call log acquisition."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from categorizer import categorize
from errors import ERROR_MESSAGES, FETCH_FAILED, PERMISSION_DENIED
from interfaces import PHONE_CALL_LOG, CallLogSource, PermissionGate
from models import CallType, LoadState, PermissionStatus

logger = logging.getLogger(__name__)


async def load_call_log(
    permission_gate: PermissionGate,
    source: CallLogSource,
    *,
    fetch_timeout_s: Optional[float] = None,
    missing_type: CallType = CallType.UNKNOWN,
) -> LoadState:
    """Request the call log permission, fetch and categorize.

    Each call is an independent attempt: the permission is requested again and
    the source queried again. Fetch errors become a failed state and are not
    re-raised.
    """
    status = await permission_gate.request(PHONE_CALL_LOG)
    if status != PermissionStatus.GRANTED:
        logger.info("Call log permission denied")
        return LoadState.failed(PERMISSION_DENIED, ERROR_MESSAGES[PERMISSION_DENIED])

    try:
        records = await _fetch(source, fetch_timeout_s)
    except Exception as exc:
        logger.error(f"Error fetching call logs: {exc}")
        return LoadState.failed(FETCH_FAILED, f"{ERROR_MESSAGES[FETCH_FAILED]}{exc}")

    view = categorize(records, missing_type=missing_type)
    logger.info(f"Loaded {len(view.all)} call records")
    return LoadState.loaded(view)


async def _fetch(source: CallLogSource, timeout_s: Optional[float]):
    if timeout_s is None:
        return await source.fetch()
    try:
        return await asyncio.wait_for(source.fetch(), timeout=timeout_s)
    except asyncio.TimeoutError:
        raise TimeoutError(f"timed out after {timeout_s:g}s") from None
