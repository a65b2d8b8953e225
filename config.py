"""Simple JSON-based config store."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SOURCE_ADB = "adb"
SOURCE_BACKUP = "backup"
DEFAULT_FETCH_TIMEOUT_S = 30.0


class JsonConfigStore:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or Path.home() / ".config" / "call_logger" / "config.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def get_source(self) -> str:
        data = self._read_all()
        source = str(data.get("source", SOURCE_ADB))
        if source not in (SOURCE_ADB, SOURCE_BACKUP):
            logger.warning(f"Unknown call log source {source!r}, using {SOURCE_ADB}")
            return SOURCE_ADB
        return source

    def set_source(self, source: str) -> None:
        self._update("source", source)

    def get_adb_path(self) -> str:
        data = self._read_all()
        return str(data.get("adb_path") or "adb")

    def get_device_serial(self) -> Optional[str]:
        data = self._read_all()
        serial = data.get("device_serial")
        return str(serial) if serial else None

    def set_device_serial(self, serial: Optional[str]) -> None:
        self._update("device_serial", serial)

    def get_backup_dir(self) -> Optional[str]:
        data = self._read_all()
        backup_dir = data.get("backup_dir")
        return str(backup_dir) if backup_dir else None

    def set_backup_dir(self, backup_dir: Optional[str]) -> None:
        self._update("backup_dir", backup_dir)

    def get_fetch_timeout_s(self) -> float:
        data = self._read_all()
        try:
            value = float(data.get("fetch_timeout_s", DEFAULT_FETCH_TIMEOUT_S))
        except (TypeError, ValueError):
            return DEFAULT_FETCH_TIMEOUT_S
        return value if value > 0 else DEFAULT_FETCH_TIMEOUT_S

    def get_permission_granted(self) -> bool:
        data = self._read_all()
        return data.get("permission_granted") is True

    def set_permission_granted(self, granted: bool) -> None:
        self._update("permission_granted", bool(granted))

    def _update(self, key: str, value: object) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning(f"Config load failed: {exc}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
