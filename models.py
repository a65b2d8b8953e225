"""Core data models for the app."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional


class CallType(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"
    MISSED = "missed"
    REJECTED = "rejected"
    BLOCKED = "blocked"
    VOICEMAIL = "voicemail"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: object) -> Optional["CallType"]:
        """Map a provider value (Android type code or name) to a CallType.

        ``None`` and empty strings stay ``None`` so the categorizer can decide
        where untyped records go. Anything else unrecognized is ``UNKNOWN``.
        """
        if raw is None:
            return None
        if isinstance(raw, CallType):
            return raw
        text = str(raw).strip().lower()
        if not text or text == "null":
            return None
        if text in _ANDROID_TYPE_CODES:
            return _ANDROID_TYPE_CODES[text]
        try:
            return cls(text)
        except ValueError:
            return cls.UNKNOWN


# android.provider.CallLog.Calls.TYPE; 7 (answered externally) has no bucket.
_ANDROID_TYPE_CODES = {
    "1": CallType.INCOMING,
    "2": CallType.OUTGOING,
    "3": CallType.MISSED,
    "4": CallType.VOICEMAIL,
    "5": CallType.REJECTED,
    "6": CallType.BLOCKED,
}


class CallLogTab(str, Enum):
    ALL = "All"
    INCOMING = "Incoming"
    OUTGOING = "Outgoing"
    MISSED = "Missed"
    REJECTED = "Rejected"

    @property
    def call_type(self) -> Optional[CallType]:
        if self is CallLogTab.ALL:
            return None
        return CallType(self.name.lower())


class LoadStatus(str, Enum):
    LOADING = "LOADING"
    LOADED = "LOADED"
    FAILED = "FAILED"


class PermissionStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"


@dataclass(frozen=True)
class CallRecord:
    number: Optional[str] = None
    name: Optional[str] = None
    timestamp_ms: Optional[int] = None
    duration_sec: Optional[int] = None
    call_type: Optional[CallType] = None


@dataclass(frozen=True)
class CategorizedView:
    all: tuple[CallRecord, ...] = ()
    buckets: Mapping[CallType, tuple[CallRecord, ...]] = field(default_factory=dict)

    def bucket(self, call_type: CallType) -> tuple[CallRecord, ...]:
        return self.buckets.get(call_type, ())

    def for_tab(self, tab: CallLogTab) -> tuple[CallRecord, ...]:
        call_type = tab.call_type
        if call_type is None:
            return self.all
        return self.bucket(call_type)

    def counts(self) -> dict[CallType, int]:
        return {call_type: len(self.bucket(call_type)) for call_type in CallType}


@dataclass(frozen=True)
class LoadState:
    status: LoadStatus
    view: Optional[CategorizedView] = None
    code: str = ""
    reason: str = ""

    @classmethod
    def loading(cls) -> "LoadState":
        return cls(status=LoadStatus.LOADING)

    @classmethod
    def loaded(cls, view: CategorizedView) -> "LoadState":
        return cls(status=LoadStatus.LOADED, view=view)

    @classmethod
    def failed(cls, code: str, reason: str) -> "LoadState":
        return cls(status=LoadStatus.FAILED, code=code, reason=reason)


@dataclass(frozen=True)
class StyleTag:
    color: str
    icon: str


@dataclass(frozen=True)
class CallEntryView:
    title: str
    number_line: Optional[str]
    timestamp_text: str
    type_text: str
    duration_text: str
    style: StyleTag


@dataclass
class CopyResult:
    success: bool
    reason: str
