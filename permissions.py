"""User-consent permission gate for reading the call log."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from interfaces import ConfigStore
from models import PermissionStatus

logger = logging.getLogger(__name__)

PromptCallback = Callable[[str], bool]


class ConsentPermissionGate:
    """Asks the user once and remembers a grant, like a mobile runtime permission.

    Denials are not remembered, so the next request prompts again.
    """

    def __init__(self, config_store: ConfigStore, prompt: Optional[PromptCallback] = None) -> None:
        self._config_store = config_store
        self._prompt = prompt

    async def request(self, kind: str) -> PermissionStatus:
        if self._config_store.get_permission_granted():
            return PermissionStatus.GRANTED
        if self._prompt is None:
            logger.warning(f"No prompt available to request {kind}")
            return PermissionStatus.DENIED
        if not self._prompt(kind):
            return PermissionStatus.DENIED
        try:
            self._config_store.set_permission_granted(True)
        except OSError as exc:
            # Still granted for this session; the user is asked again next launch.
            logger.warning(f"Could not remember {kind} grant: {exc}")
        logger.info(f"Permission {kind} granted")
        return PermissionStatus.GRANTED

    def revoke(self) -> None:
        self._config_store.set_permission_granted(False)
