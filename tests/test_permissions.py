from __future__ import annotations

import asyncio
from pathlib import Path

from call_log_controller import CallLogController
from config import JsonConfigStore
from fakes import FakeSource, sample_records
from interfaces import PHONE_CALL_LOG
from models import LoadStatus, PermissionStatus
from permissions import ConsentPermissionGate


class Prompt:
    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.asked: list[str] = []

    def __call__(self, kind: str) -> bool:
        self.asked.append(kind)
        return self.answers.pop(0)


def test_grant_is_remembered(tmp_path: Path) -> None:
    store = JsonConfigStore(path=tmp_path / "config.json")
    prompt = Prompt(True)
    gate = ConsentPermissionGate(store, prompt=prompt)

    assert asyncio.run(gate.request(PHONE_CALL_LOG)) == PermissionStatus.GRANTED
    assert asyncio.run(gate.request(PHONE_CALL_LOG)) == PermissionStatus.GRANTED
    assert prompt.asked == [PHONE_CALL_LOG]
    assert store.get_permission_granted() is True


def test_denial_asks_again_next_time(tmp_path: Path) -> None:
    store = JsonConfigStore(path=tmp_path / "config.json")
    prompt = Prompt(False, True)
    gate = ConsentPermissionGate(store, prompt=prompt)

    assert asyncio.run(gate.request(PHONE_CALL_LOG)) == PermissionStatus.DENIED
    assert store.get_permission_granted() is False
    assert asyncio.run(gate.request(PHONE_CALL_LOG)) == PermissionStatus.GRANTED
    assert len(prompt.asked) == 2


def test_no_prompt_means_denied(tmp_path: Path) -> None:
    gate = ConsentPermissionGate(JsonConfigStore(path=tmp_path / "config.json"))

    assert asyncio.run(gate.request(PHONE_CALL_LOG)) == PermissionStatus.DENIED


def test_revoke_forgets_grant(tmp_path: Path) -> None:
    store = JsonConfigStore(path=tmp_path / "config.json")
    store.set_permission_granted(True)
    prompt = Prompt(False)
    gate = ConsentPermissionGate(store, prompt=prompt)

    gate.revoke()

    assert asyncio.run(gate.request(PHONE_CALL_LOG)) == PermissionStatus.DENIED
    assert prompt.asked == [PHONE_CALL_LOG]


class ReadOnlyStore(JsonConfigStore):
    def set_permission_granted(self, granted: bool) -> None:
        raise PermissionError("config.json is read-only")


def test_grant_holds_when_config_cannot_be_saved(tmp_path: Path) -> None:
    store = ReadOnlyStore(path=tmp_path / "config.json")
    gate = ConsentPermissionGate(store, prompt=Prompt(True))

    assert asyncio.run(gate.request(PHONE_CALL_LOG)) == PermissionStatus.GRANTED
    assert store.get_permission_granted() is False


def test_unsaved_grant_still_loads_call_log(tmp_path: Path) -> None:
    store = ReadOnlyStore(path=tmp_path / "config.json")
    source = FakeSource(sample_records())
    controller = CallLogController(ConsentPermissionGate(store, prompt=Prompt(True)), source)

    state = asyncio.run(controller.refresh())

    assert state.status == LoadStatus.LOADED
    assert source.calls == 1
