"""Application entrypoint."""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from datetime import datetime
from pathlib import Path

from adb_source import AdbCallLogSource
from backup_source import BackupCallLogSource
from call_log_controller import CallLogController
from clipboard import ClipboardService
from config import SOURCE_BACKUP, JsonConfigStore
from interfaces import CallLogSource
from models import CallLogTab, LoadState, LoadStatus
from permissions import ConsentPermissionGate

try:
    from PySide6.QtCore import QObject, Qt, Signal
    from PySide6.QtWidgets import QApplication, QMessageBox
except Exception as exc:  # pragma: no cover
    raise SystemExit(f"PySide6 is required to run the desktop app: {exc}")

from call_log_window import CallLogWindow

logger = logging.getLogger(__name__)


class UIBridge(QObject):
    state_signal = Signal()
    permission_signal = Signal(str)


class App:
    def __init__(self) -> None:
        self.app = QApplication(sys.argv)
        self.config_store = JsonConfigStore()
        self.clipboard = ClipboardService()
        self.window = CallLogWindow()
        self.ui = UIBridge()
        self.ui.state_signal.connect(self._on_state_change_ui)
        # Worker threads block until the user has answered the dialog.
        self.ui.permission_signal.connect(self._ask_permission_ui, Qt.BlockingQueuedConnection)
        self._permission_answer = False

        self.permission_gate = ConsentPermissionGate(self.config_store, prompt=self._ask_permission)
        self.controller = CallLogController(
            permission_gate=self.permission_gate,
            source=self._build_source(),
            fetch_timeout_s=self.config_store.get_fetch_timeout_s(),
            on_state_change=self._on_state_change,
        )

        self.window.refresh_requested.connect(self.refresh)
        self.window.tab_selected.connect(self._on_tab_selected)
        self.window.copy_requested.connect(self._copy_number)
        self.window.forget_permission_requested.connect(self._forget_permission)

    def _build_source(self) -> CallLogSource:
        if self.config_store.get_source() == SOURCE_BACKUP:
            backup_dir = self.config_store.get_backup_dir() or str(Path.home() / "SMSBackup")
            return BackupCallLogSource(backup_dir)
        return AdbCallLogSource(
            adb_path=self.config_store.get_adb_path(),
            serial=self.config_store.get_device_serial(),
        )

    # ------------------------------------------------------------------
    # Callbacks (called from worker threads → emit signals for UI thread)
    # ------------------------------------------------------------------

    def _on_state_change(self, from_state: LoadState, to_state: LoadState) -> None:
        self.ui.state_signal.emit()

    def _ask_permission(self, kind: str) -> bool:
        self.ui.permission_signal.emit(kind)
        return self._permission_answer

    # ------------------------------------------------------------------
    # UI thread handlers (safe for Qt)
    # ------------------------------------------------------------------

    def _ask_permission_ui(self, kind: str) -> None:
        answer = QMessageBox.question(
            self.window,
            "Permission required",
            "Allow Call Logger to read the phone call history?",
        )
        self._permission_answer = answer == QMessageBox.Yes

    def _on_state_change_ui(self) -> None:
        state = self.controller.state
        if state.status == LoadStatus.LOADING:
            self.window.show_loading()
        elif state.status == LoadStatus.FAILED:
            self.window.show_error(state.reason)
        else:
            self._render_entries()

    def _on_tab_selected(self, tab_text: str) -> None:
        self.controller.select_tab(CallLogTab(tab_text))
        if self.controller.state.status == LoadStatus.LOADED:
            self._render_entries()

    def _render_entries(self) -> None:
        rows = self.controller.rows(datetime.now())
        self.window.show_entries([entry for _, entry in rows], [record.number for record, _ in rows])

    def _forget_permission(self) -> None:
        try:
            self.permission_gate.revoke()
        except OSError as exc:
            logger.warning(f"Could not forget permission: {exc}")
            QMessageBox.warning(self.window, "Forget permission failed", str(exc))
            return
        self.refresh()

    def _copy_number(self, number: str) -> None:
        result = self.clipboard.copy_text(number)
        if not result.success:
            logger.warning(f"Copy failed: {result.reason}")
            QMessageBox.warning(self.window, "Copy failed", result.reason)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        # The permission prompt blocks its caller, so loads never run on the Qt thread.
        self.window.show_loading()
        threading.Thread(
            target=asyncio.run,
            args=(self.controller.refresh(),),
            daemon=True,
        ).start()

    def run(self) -> int:
        self.window.show()
        self.refresh()
        return self.app.exec()


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = App()
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
