"""Shared error codes and user-facing messages."""

from __future__ import annotations

PERMISSION_DENIED = "PERMISSION_DENIED"
FETCH_FAILED = "FETCH_FAILED"
LOAD_FAILED = "LOAD_FAILED"
ADB_UNAVAILABLE = "ADB_UNAVAILABLE"
BACKUP_UNREADABLE = "BACKUP_UNREADABLE"

ERROR_MESSAGES = {
    PERMISSION_DENIED: "Phone permission is required to access call logs.",
    FETCH_FAILED: "Error fetching call logs: ",
    LOAD_FAILED: "Error loading call logs: ",
    ADB_UNAVAILABLE: "No Android device reachable over adb.",
    BACKUP_UNREADABLE: "Call log backup could not be read.",
}


class CallLogSourceError(RuntimeError):
    """Raised by a call log source when the platform query fails."""

    def __init__(self, code: str, detail: str = "") -> None:
        self.code = code
        self.detail = detail
        message = ERROR_MESSAGES.get(code, code)
        super().__init__(f"{message} {detail}".strip() if detail else message)
