# staffdesk/ui/sign_in_page.py
from __future__ import annotations
from PySide6.QtCore import Qt, QSettings, Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QCheckBox,
    QPushButton, QFormLayout, QFrame
)

from ..core import notifications as msg


class SignInPage(QWidget):
    """Sign-in view shown whenever there is no session."""

    sign_in_requested = Signal(str, str, str)  # username, password, account

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.settings = QSettings("StaffDesk", "Client")

        outer = QVBoxLayout(self)
        outer.addStretch(1)
        card = QFrame()
        card.setFrameShape(QFrame.StyledPanel)
        card.setMaximumWidth(420)
        root = QVBoxLayout(card)

        title = QLabel("Employee Management System")
        title.setStyleSheet("font-size: 18px; font-weight: 600;")
        root.addWidget(title)
        self.prompt = QLabel(msg.SIGN_IN_PROMPT)
        self.prompt.setWordWrap(True)
        root.addWidget(self.prompt)

        form = QFormLayout()
        self.ed_user = QLineEdit(); self.ed_user.setPlaceholderText("Username")
        self.ed_pass = QLineEdit(); self.ed_pass.setEchoMode(QLineEdit.Password); self.ed_pass.setPlaceholderText("Password")
        self.ed_account = QLineEdit(); self.ed_account.setPlaceholderText("Account")
        form.addRow("Username", self.ed_user)
        form.addRow("Password", self.ed_pass)
        form.addRow("Account", self.ed_account)
        root.addLayout(form)

        chk_row = QHBoxLayout()
        self.cb_remember = QCheckBox("Remember username and account on this PC")
        chk_row.addWidget(self.cb_remember)
        chk_row.addStretch(1)
        root.addLayout(chk_row)

        self.btn_sign_in = QPushButton("Sign In")
        self.btn_sign_in.setDefault(True)
        self.btn_sign_in.clicked.connect(self._on_sign_in_clicked)
        root.addWidget(self.btn_sign_in)

        # Enter key submits
        for ed in (self.ed_user, self.ed_pass, self.ed_account):
            ed.returnPressed.connect(self._on_sign_in_clicked)

        outer.addWidget(card, alignment=Qt.AlignHCenter)
        outer.addStretch(1)

        self._load_cached_fields()

    def credentials(self) -> tuple[str, str, str]:
        return self.ed_user.text().strip(), self.ed_pass.text(), self.ed_account.text().strip()

    def set_busy(self, busy: bool) -> None:
        self.btn_sign_in.setEnabled(not busy)
        self.btn_sign_in.setText("Signing in..." if busy else "Sign In")

    def reset(self) -> None:
        self.ed_pass.clear()
        self.set_busy(False)

    # ----- internals
    def _load_cached_fields(self) -> None:
        if self.settings.value("login/remember", False, bool):
            self.ed_user.setText(self.settings.value("login/username", "", str))
            self.ed_account.setText(self.settings.value("login/account", "", str))
            self.cb_remember.setChecked(True)

    def _cache_now(self) -> None:
        if self.cb_remember.isChecked():
            self.settings.setValue("login/remember", True)
            self.settings.setValue("login/username", self.ed_user.text().strip())
            self.settings.setValue("login/account", self.ed_account.text().strip())
        else:
            self.settings.setValue("login/remember", False)
            self.settings.remove("login/username")
            self.settings.remove("login/account")

    def _on_sign_in_clicked(self) -> None:
        username, password, account = self.credentials()
        if not (username and password and account):
            self.prompt.setText("Username, password and account are required.")
            return
        self.prompt.setText(msg.SIGN_IN_PROMPT)
        self._cache_now()
        self.sign_in_requested.emit(username, password, account)
