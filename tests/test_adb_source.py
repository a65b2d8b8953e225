"""Tests for AdbCallLogSource."""

from __future__ import annotations

import asyncio

import pytest

import adb_source
from adb_source import AdbCallLogSource, parse_content_query
from errors import ADB_UNAVAILABLE, CallLogSourceError
from models import CallRecord, CallType

OUTPUT = """\
Row: 0 number=+15550100, name=Ann, date=1710498600000, duration=42, type=1
Row: 1 number=+15550101, name=NULL, date=1710495000000, duration=0, type=3
Row: 2 number=NULL, name=Smith, John, date=1710491400000, duration=3725, type=6
Row: 3 number=+15550103, name=NULL, date=NULL, duration=NULL, type=NULL
"""


# ---------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------

class FakeProcess:
    def __init__(
        self,
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
        hang: bool = False,
        exited: bool = False,
    ) -> None:
        self._stdout = stdout.encode("utf-8")
        self._stderr = stderr.encode("utf-8")
        self.returncode = returncode
        self._hang = hang
        self._exited = exited
        self.killed = False

    async def communicate(self) -> tuple[bytes, bytes]:
        if self._hang:
            await asyncio.sleep(3600)
        return self._stdout, self._stderr

    def kill(self) -> None:
        if self._exited:
            raise ProcessLookupError()
        self.killed = True

    async def wait(self) -> int:
        return self.returncode


def _patch_exec(monkeypatch, process: FakeProcess) -> list[tuple]:  # noqa: ANN001
    calls: list[tuple] = []

    async def fake_exec(*args, **kwargs):  # noqa: ANN002, ANN003
        calls.append(args)
        return process

    monkeypatch.setattr(adb_source.asyncio, "create_subprocess_exec", fake_exec)
    return calls


# ---------------------------------------------------------------
# parse_content_query
# ---------------------------------------------------------------

def test_parse_rows() -> None:
    records = parse_content_query(OUTPUT)

    assert records[0] == CallRecord(
        number="+15550100",
        name="Ann",
        timestamp_ms=1710498600000,
        duration_sec=42,
        call_type=CallType.INCOMING,
    )
    assert records[1].name is None
    assert records[1].call_type is CallType.MISSED


def test_parse_keeps_commas_inside_names() -> None:
    records = parse_content_query(OUTPUT)

    assert records[2].number is None
    assert records[2].name == "Smith, John"
    assert records[2].call_type is CallType.BLOCKED


def test_parse_null_columns() -> None:
    record = parse_content_query(OUTPUT)[3]

    assert record == CallRecord(number="+15550103")


def test_parse_ignores_non_row_lines() -> None:
    assert parse_content_query("No result found.\n") == []


# ---------------------------------------------------------------
# fetch
# ---------------------------------------------------------------

def test_fetch_runs_content_query(monkeypatch) -> None:  # noqa: ANN001
    calls = _patch_exec(monkeypatch, FakeProcess(stdout=OUTPUT))
    source = AdbCallLogSource(adb_path="/opt/adb", serial="emulator-5554")

    records = asyncio.run(source.fetch())

    assert len(records) == 4
    assert calls[0][:3] == ("/opt/adb", "-s", "emulator-5554")
    assert "content://call_log/calls" in calls[0]
    assert "number:name:date:duration:type" in calls[0]


def test_fetch_without_serial_targets_default_device() -> None:
    assert AdbCallLogSource().command()[:2] == ["adb", "shell"]


def test_fetch_nonzero_exit_raises(monkeypatch) -> None:  # noqa: ANN001
    _patch_exec(monkeypatch, FakeProcess(stderr="error: no devices/emulators found", returncode=1))

    with pytest.raises(CallLogSourceError) as info:
        asyncio.run(AdbCallLogSource().fetch())

    assert info.value.code == ADB_UNAVAILABLE
    assert "no devices/emulators found" in str(info.value)


def test_fetch_provider_error_on_stdout_raises(monkeypatch) -> None:  # noqa: ANN001
    _patch_exec(monkeypatch, FakeProcess(stdout="Error while accessing provider:call_log\n"))

    with pytest.raises(CallLogSourceError, match="Error while accessing provider"):
        asyncio.run(AdbCallLogSource().fetch())


def test_fetch_missing_binary_raises(monkeypatch) -> None:  # noqa: ANN001
    async def missing(*args, **kwargs):  # noqa: ANN002, ANN003
        raise FileNotFoundError("adb")

    monkeypatch.setattr(adb_source.asyncio, "create_subprocess_exec", missing)

    with pytest.raises(CallLogSourceError, match="cannot run adb"):
        asyncio.run(AdbCallLogSource().fetch())


def test_fetch_timeout_kills_process(monkeypatch) -> None:  # noqa: ANN001
    process = FakeProcess(hang=True)
    _patch_exec(monkeypatch, process)

    with pytest.raises(CallLogSourceError, match="timed out"):
        asyncio.run(AdbCallLogSource(timeout_s=0.05).fetch())

    assert process.killed is True


def test_fetch_timeout_when_process_already_exited(monkeypatch) -> None:  # noqa: ANN001
    _patch_exec(monkeypatch, FakeProcess(hang=True, exited=True))

    with pytest.raises(CallLogSourceError, match="timed out"):
        asyncio.run(AdbCallLogSource(timeout_s=0.05).fetch())
