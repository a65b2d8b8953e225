"""Protocol interfaces used by CallLogController."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from models import CallRecord, PermissionStatus

PHONE_CALL_LOG = "phone-call-log"


class PermissionGate(Protocol):
    async def request(self, kind: str) -> PermissionStatus: ...


class CallLogSource(Protocol):
    async def fetch(self) -> Sequence[CallRecord]: ...


class ConfigStore(Protocol):
    def get_source(self) -> str: ...

    def get_adb_path(self) -> str: ...

    def get_device_serial(self) -> Optional[str]: ...

    def get_backup_dir(self) -> Optional[str]: ...

    def get_fetch_timeout_s(self) -> float: ...

    def get_permission_granted(self) -> bool: ...

    def set_permission_granted(self, granted: bool) -> None: ...
