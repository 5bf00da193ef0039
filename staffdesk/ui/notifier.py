"""Qt presentation of notifications and the delete confirmation."""

from __future__ import annotations

import asyncio

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QMainWindow, QMessageBox, QWidget

from ..core.notifications import Notification, Variant


class QtNotifier:
    """Success messages go to the status bar; errors open a non-modal box."""

    def __init__(self, window: QMainWindow) -> None:
        self._window = window

    def notify(self, notification: Notification) -> None:
        text = f"{notification.title}: {notification.description}"
        self._window.statusBar().showMessage(text, 5000)
        if notification.variant is Variant.DESTRUCTIVE:
            box = QMessageBox(
                QMessageBox.Warning,
                notification.title,
                notification.description,
                QMessageBox.Ok,
                self._window,
            )
            box.setAttribute(Qt.WA_DeleteOnClose)
            box.open()


def ask_confirmation(parent: QWidget, text: str) -> "asyncio.Future[bool]":
    """Open a Yes/No question without blocking the event loop."""

    future: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
    box = QMessageBox(QMessageBox.Question, "Delete", text, QMessageBox.Yes | QMessageBox.No, parent)
    box.setDefaultButton(QMessageBox.No)
    box.setAttribute(Qt.WA_DeleteOnClose)

    def _done(_result: int) -> None:
        if not future.done():
            future.set_result(box.clickedButton() is box.button(QMessageBox.Yes))

    box.finished.connect(_done)
    box.open()
    return future
