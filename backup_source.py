"""Call log source reading SMS Backup & Restore ``calls-*.xml`` exports."""

from __future__ import annotations

import asyncio
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from errors import BACKUP_UNREADABLE, CallLogSourceError
from models import CallRecord, CallType

logger = logging.getLogger(__name__)

BACKUP_GLOB = "calls-*.xml"


class BackupCallLogSource:
    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    async def fetch(self) -> list[CallRecord]:
        return await asyncio.to_thread(self.read_all)

    def read_all(self) -> list[CallRecord]:
        """Merge every backup file, newest call first.

        Overlapping exports repeat calls; a call is identified by its
        timestamp and number. Calls without a timestamp are always kept.
        """
        if not self._directory.is_dir():
            raise CallLogSourceError(BACKUP_UNREADABLE, f"{self._directory} is not a directory")

        merged: list[CallRecord] = []
        seen: set[tuple[Optional[int], Optional[str]]] = set()
        for path in sorted(self._directory.glob(BACKUP_GLOB)):
            for record in parse_backup_file(path):
                if record.timestamp_ms is not None:
                    key = (record.timestamp_ms, record.number)
                    if key in seen:
                        continue
                    seen.add(key)
                merged.append(record)

        merged.sort(key=lambda r: r.timestamp_ms or 0, reverse=True)
        logger.info(f"Read {len(merged)} calls from {self._directory}")
        return merged


def parse_backup_file(path: Path) -> list[CallRecord]:
    records: list[CallRecord] = []
    try:
        for _event, el in ET.iterparse(str(path), events=("end",)):
            if el.tag.lower() == "call":
                records.append(_to_record(el))
            el.clear()
    except ET.ParseError as exc:
        raise CallLogSourceError(BACKUP_UNREADABLE, f"{path.name}: {exc}") from exc
    except OSError as exc:
        raise CallLogSourceError(BACKUP_UNREADABLE, f"{path.name}: {exc}") from exc
    return records


def _to_record(el: ET.Element) -> CallRecord:
    return CallRecord(
        number=_text(el.get("number")),
        name=_text(el.get("contact_name")),
        timestamp_ms=_int(el.get("date")),
        duration_sec=_int(el.get("duration")),
        call_type=CallType.parse(el.get("type")),
    )


def _text(value: Optional[str]) -> Optional[str]:
    # The exporter writes "(Unknown)" for contacts it could not resolve.
    if not value or value in ("null", "(Unknown)"):
        return None
    return value


def _int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value else None
    except ValueError:
        return None
