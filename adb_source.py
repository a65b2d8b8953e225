"""Call log source backed by a connected Android device over adb.

The device's call log content provider is queried through
``adb shell content query``; each output line looks like::

    Row: 0 number=+15550100, name=Ann, date=1710491400000, duration=42, type=1

Missing columns are printed as ``NULL``.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Optional

from errors import ADB_UNAVAILABLE, CallLogSourceError
from models import CallRecord, CallType

logger = logging.getLogger(__name__)

CALL_LOG_URI = "content://call_log/calls"
PROJECTION = ("number", "name", "date", "duration", "type")

_ROW_PREFIX = re.compile(r"^Row:\s*\d+\s*")
# Split on ", key=" for projected keys only, so commas inside names survive.
_FIELD_SPLIT = re.compile(r",\s*(?=(?:%s)=)" % "|".join(PROJECTION))


class AdbCallLogSource:
    def __init__(
        self,
        adb_path: str = "adb",
        serial: Optional[str] = None,
        timeout_s: float = 15.0,
    ) -> None:
        self._adb_path = adb_path
        self._serial = serial
        self._timeout_s = timeout_s

    def command(self) -> list[str]:
        cmd = [self._adb_path]
        if self._serial:
            cmd += ["-s", self._serial]
        cmd += [
            "shell", "content", "query",
            "--uri", CALL_LOG_URI,
            "--projection", ":".join(PROJECTION),
            "--sort", "date DESC",
        ]
        return cmd

    async def fetch(self) -> list[CallRecord]:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command(),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise CallLogSourceError(ADB_UNAVAILABLE, f"cannot run {self._adb_path}: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout_s)
        except asyncio.TimeoutError:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()
            raise CallLogSourceError(ADB_UNAVAILABLE, f"adb timed out after {self._timeout_s:g}s") from None

        out = stdout.decode("utf-8", errors="replace")
        if proc.returncode != 0:
            err = stderr.decode("utf-8", errors="replace").strip() or out.strip()
            raise CallLogSourceError(ADB_UNAVAILABLE, err or f"adb exited with {proc.returncode}")

        # content query reports provider errors on stdout with exit code 0
        if out.lstrip().startswith(("Error", "Exception")):
            raise CallLogSourceError(ADB_UNAVAILABLE, out.strip().splitlines()[0])

        records = parse_content_query(out)
        logger.info(f"Read {len(records)} calls from device {self._serial or 'default'}")
        return records


def parse_content_query(output: str) -> list[CallRecord]:
    records: list[CallRecord] = []
    for line in output.splitlines():
        line = line.strip()
        if not line.startswith("Row:"):
            continue
        fields = _parse_row(_ROW_PREFIX.sub("", line))
        records.append(CallRecord(
            number=fields.get("number"),
            name=fields.get("name"),
            timestamp_ms=_to_int(fields.get("date")),
            duration_sec=_to_int(fields.get("duration")),
            call_type=CallType.parse(fields.get("type")),
        ))
    return records


def _parse_row(body: str) -> dict[str, Optional[str]]:
    fields: dict[str, Optional[str]] = {}
    for part in _FIELD_SPLIT.split(body):
        key, sep, value = part.partition("=")
        if not sep:
            continue
        value = value.strip()
        fields[key.strip()] = None if value in ("", "NULL") else value
    return fields


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.debug(f"Skipped non-numeric value {value!r}")
        return None
