"""Tabbed call log window."""

from __future__ import annotations

from typing import Sequence

from models import CallEntryView, CallLogTab

try:
    from PySide6.QtCore import QSize, Qt, Signal
    from PySide6.QtGui import QBrush, QColor, QFont, QIcon, QPainter, QPixmap
    from PySide6.QtWidgets import (
        QHBoxLayout,
        QLabel,
        QListWidget,
        QListWidgetItem,
        QMenu,
        QPushButton,
        QStackedWidget,
        QTabBar,
        QVBoxLayout,
        QWidget,
    )
except Exception:  # pragma: no cover
    QSize = None  # type: ignore
    Qt = None  # type: ignore
    Signal = lambda *args: None  # type: ignore  # noqa: E731
    QBrush = QColor = QFont = QIcon = QPainter = QPixmap = None  # type: ignore
    QHBoxLayout = QLabel = QListWidget = QListWidgetItem = QMenu = None  # type: ignore
    QPushButton = QStackedWidget = QTabBar = QVBoxLayout = None  # type: ignore
    QWidget = object  # type: ignore

EMPTY_TEXT = "No call records found"
LOADING_TEXT = "Loading call logs..."

COLORS = {
    "green": "#4CAF50",
    "blue": "#2196F3",
    "red": "#F44336",
    "orange": "#FF9800",
    "purple": "#9C27B0",
    "teal": "#009688",
    "grey": "#9E9E9E",
}

GLYPHS = {
    "received": "↙",
    "made": "↗",
    "missed": "!",
    "declined": "✕",
    "blocked": "⊘",
    "voicemail": "✉",
    "call": "✆",
}

TAB_STYLES = {
    CallLogTab.INCOMING: ("green", "received"),
    CallLogTab.OUTGOING: ("blue", "made"),
    CallLogTab.MISSED: ("red", "missed"),
    CallLogTab.REJECTED: ("orange", "blocked"),
}

_PAGE_LOADING = 0
_PAGE_ERROR = 1
_PAGE_LIST = 2


def create_icon(color_tag: str, icon_tag: str, size: int = 32) -> QIcon:
    """Paint a tinted circle with the icon glyph on top."""
    color = COLORS.get(color_tag, COLORS["grey"])
    pixmap = QPixmap(QSize(size, size))
    pixmap.fill(QColor(0, 0, 0, 0))
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing, True)
    fill = QColor(color)
    fill.setAlpha(51)
    painter.setBrush(QBrush(fill))
    painter.setPen(Qt.NoPen)
    painter.drawEllipse(1, 1, size - 2, size - 2)
    painter.setPen(QColor(color))
    font = QFont()
    font.setPixelSize(int(size * 0.55))
    font.setBold(True)
    painter.setFont(font)
    painter.drawText(pixmap.rect(), Qt.AlignCenter, GLYPHS.get(icon_tag, GLYPHS["call"]))
    painter.end()
    return QIcon(pixmap)


class CallLogWindow(QWidget):
    refresh_requested = Signal()
    tab_selected = Signal(str)
    copy_requested = Signal(str)
    forget_permission_requested = Signal()

    def __init__(self) -> None:
        if Qt is None:
            raise RuntimeError("PySide6 is not installed")
        super().__init__()
        self.setWindowTitle("Call Logs")
        self.resize(420, 640)

        title = QLabel("Call Logs")
        title.setStyleSheet("font-size: 20px; font-weight: bold;")
        self._refresh_button = QPushButton("Refresh")
        self._refresh_button.setToolTip("Refresh Logs")
        self._refresh_button.clicked.connect(self.refresh_requested.emit)
        forget_button = QPushButton("Forget permission")
        forget_button.setToolTip("Ask again before reading the call log")
        forget_button.clicked.connect(self.forget_permission_requested.emit)

        header = QHBoxLayout()
        header.addWidget(title)
        header.addStretch(1)
        header.addWidget(forget_button)
        header.addWidget(self._refresh_button)

        self._tabs = QTabBar()
        self._tabs.setExpanding(False)
        for tab in CallLogTab:
            index = self._tabs.addTab(tab.value)
            self._tabs.setTabData(index, tab.value)
            style = TAB_STYLES.get(tab)
            if style is not None:
                self._tabs.setTabIcon(index, create_icon(*style, size=16))
        self._tabs.currentChanged.connect(self._on_tab_changed)

        self._loading_label = QLabel(LOADING_TEXT)
        self._loading_label.setAlignment(Qt.AlignCenter)

        self._error_label = QLabel("")
        self._error_label.setAlignment(Qt.AlignCenter)
        self._error_label.setWordWrap(True)
        self._error_label.setStyleSheet("color: #F44336; font-size: 14px;")
        retry_button = QPushButton("Retry")
        retry_button.clicked.connect(self.refresh_requested.emit)
        error_page = QWidget()
        error_layout = QVBoxLayout()
        error_layout.addStretch(1)
        error_layout.addWidget(self._error_label)
        error_layout.addWidget(retry_button, alignment=Qt.AlignCenter)
        error_layout.addStretch(1)
        error_page.setLayout(error_layout)

        self._list = QListWidget()
        self._list.setIconSize(QSize(40, 40))
        self._list.setSpacing(4)
        self._list.setContextMenuPolicy(Qt.CustomContextMenu)
        self._list.customContextMenuRequested.connect(self._show_item_menu)

        self._pages = QStackedWidget()
        self._pages.insertWidget(_PAGE_LOADING, self._loading_label)
        self._pages.insertWidget(_PAGE_ERROR, error_page)
        self._pages.insertWidget(_PAGE_LIST, self._list)

        layout = QVBoxLayout()
        layout.addLayout(header)
        layout.addWidget(self._tabs)
        layout.addWidget(self._pages, 1)
        self.setLayout(layout)

    def show_loading(self) -> None:
        self._refresh_button.setEnabled(False)
        self._pages.setCurrentIndex(_PAGE_LOADING)

    def show_error(self, reason: str) -> None:
        self._refresh_button.setEnabled(True)
        self._error_label.setText(reason)
        self._pages.setCurrentIndex(_PAGE_ERROR)

    def show_entries(self, entries: Sequence[CallEntryView], numbers: Sequence[str | None]) -> None:
        """Fill the list; ``numbers`` parallels ``entries`` for the copy action."""
        self._refresh_button.setEnabled(True)
        self._list.clear()
        if not entries:
            placeholder = QListWidgetItem(EMPTY_TEXT)
            placeholder.setFlags(Qt.NoItemFlags)
            placeholder.setTextAlignment(Qt.AlignCenter)
            self._list.addItem(placeholder)
        for entry, number in zip(entries, numbers):
            lines = [entry.title]
            if entry.number_line:
                lines.append(entry.number_line)
            lines.append(entry.timestamp_text)
            lines.append(f"{entry.type_text}   {entry.duration_text}")
            item = QListWidgetItem(create_icon(entry.style.color, entry.style.icon), "\n".join(lines))
            item.setData(Qt.UserRole, number)
            self._list.addItem(item)
        self._pages.setCurrentIndex(_PAGE_LIST)

    def _on_tab_changed(self, index: int) -> None:
        self.tab_selected.emit(self._tabs.tabData(index))

    def _show_item_menu(self, pos) -> None:  # noqa: ANN001
        item = self._list.itemAt(pos)
        if item is None:
            return
        number = item.data(Qt.UserRole)
        if not number:
            return
        menu = QMenu(self)
        copy_action = menu.addAction("Copy number")
        copy_action.triggered.connect(lambda: self.copy_requested.emit(number))
        menu.exec(self._list.mapToGlobal(pos))
