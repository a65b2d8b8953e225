"""State-machine based call log screen orchestration."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from acquisition import load_call_log
from errors import ERROR_MESSAGES, LOAD_FAILED
from formatter import describe
from interfaces import CallLogSource, PermissionGate
from models import (
    CallEntryView,
    CallLogTab,
    CallRecord,
    CallType,
    CategorizedView,
    LoadState,
    LoadStatus,
)

logger = logging.getLogger(__name__)

StateCallback = Callable[[LoadState, LoadState], None]


class CallLogController:
    def __init__(
        self,
        permission_gate: PermissionGate,
        source: CallLogSource,
        fetch_timeout_s: Optional[float] = 30.0,
        missing_type: CallType = CallType.UNKNOWN,
        on_state_change: Optional[StateCallback] = None,
    ) -> None:
        self._permission_gate = permission_gate
        self._source = source
        self._fetch_timeout_s = fetch_timeout_s
        self._missing_type = missing_type
        self._on_state_change = on_state_change

        self._lock = threading.RLock()
        self._state = LoadState.loading()
        self._selected_tab = CallLogTab.ALL
        self._load_token = 0

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def selected_tab(self) -> CallLogTab:
        return self._selected_tab

    async def refresh(self) -> LoadState:
        """Run one load attempt and publish its result.

        A newer refresh started while this one is awaiting makes this one's
        result stale; it is then dropped and the newer state is returned.
        """
        token = self.start_load()
        try:
            result = await load_call_log(
                self._permission_gate,
                self._source,
                fetch_timeout_s=self._fetch_timeout_s,
                missing_type=self._missing_type,
            )
        except Exception as exc:
            logger.error(f"Call log load failed: {exc}")
            self.fail_load(token, LOAD_FAILED, f"{ERROR_MESSAGES[LOAD_FAILED]}{exc}")
            return self._state
        if result.status == LoadStatus.LOADED and result.view is not None:
            self.complete_load(token, result.view)
        else:
            self.fail_load(token, result.code, result.reason)
        return self._state

    def start_load(self) -> int:
        with self._lock:
            self._load_token += 1
            self._transition(LoadState.loading())
            return self._load_token

    def complete_load(self, token: int, view: CategorizedView) -> bool:
        with self._lock:
            if token != self._load_token:
                logger.debug(f"Dropping stale load {token} (latest {self._load_token})")
                return False
            self._transition(LoadState.loaded(view))
            return True

    def fail_load(self, token: int, code: str, reason: str) -> bool:
        with self._lock:
            if token != self._load_token:
                logger.debug(f"Dropping stale failure {token} (latest {self._load_token})")
                return False
            self._transition(LoadState.failed(code, reason))
            return True

    def select_tab(self, tab: CallLogTab) -> None:
        with self._lock:
            self._selected_tab = CallLogTab(tab)

    def visible_records(self) -> tuple[CallRecord, ...]:
        with self._lock:
            view = self._state.view
            if self._state.status != LoadStatus.LOADED or view is None:
                return ()
            return view.for_tab(self._selected_tab)

    def rows(self, now: Optional[datetime] = None) -> list[tuple[CallRecord, CallEntryView]]:
        """Visible records paired with their display fields."""
        now = now or datetime.now()
        return [(record, describe(record, now)) for record in self.visible_records()]

    def _transition(self, to_state: LoadState) -> None:
        from_state = self._state
        if from_state == to_state:
            return
        self._state = to_state
        if self._on_state_change:
            self._on_state_change(from_state, to_state)
