import asyncio
import logging
from datetime import datetime

from PySide6.QtWidgets import QMainWindow, QLabel, QStackedWidget, QStatusBar, QToolBar
from PySide6.QtGui import QAction
from PySide6.QtCore import QTimer

from ..core import notifications as msg
from ..core.deleter import RecordDeleter
from ..core.editor import RecordEditor
from ..core.list_loader import RecordListLoader
from ..core.mutations import MutationResult
from ..core.records import EmployeeRecord
from ..core.refresh import RefreshOrchestrator
from ..core.session import SessionContext, SessionTransition
from ..core.session_watcher import SessionWatcher, SignInRedirect
from ..services.api_client import APIClient, APIError, AuthError
from ..services.auth_provider import AuthProvider
from .employee_form import EmployeeFormDialog
from .employees_page import EmployeesPage
from .notifier import QtNotifier, ask_confirmation
from .sign_in_page import SignInPage

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Hosts the sign-in view and the employee list and wires the components."""

    def __init__(self, api: APIClient, provider: AuthProvider):
        super().__init__()
        self.setWindowTitle("StaffDesk - Employee Management")
        self.resize(1200, 760)

        self._api = api
        self._provider = provider

        # ---------- Components ----------
        self.context = SessionContext()
        self.notifier = QtNotifier(self)
        self.watcher = SessionWatcher(provider, self.context)
        self.loader = RecordListLoader(api, self.context, self.notifier)
        self.refresher = RefreshOrchestrator(self.loader)
        self.refresher.watch_session(self.context)
        self.deleter = RecordDeleter(
            api, self.context, self.notifier, confirm=lambda text: ask_confirmation(self, text)
        )
        self.redirect = SignInRedirect(self.context, self.show_sign_in)
        self._unsubscribe = self.context.subscribe(self._on_session)

        # ---------- Pages ----------
        self.pages = QStackedWidget(self)
        self.sign_in_page = SignInPage(self)
        self.sign_in_page.sign_in_requested.connect(self._on_sign_in_requested)
        self.employees_page = EmployeesPage(self.loader, self)
        self.employees_page.add_requested.connect(lambda: self._open_editor(None))
        self.employees_page.edit_requested.connect(self._open_editor)
        self.employees_page.delete_requested.connect(self._on_delete_requested)
        self.pages.addWidget(self.sign_in_page)
        self.pages.addWidget(self.employees_page)
        self.setCentralWidget(self.pages)

        # ---------- Toolbar ----------
        tb = QToolBar("Session", self)
        tb.setMovable(False)
        self.user_lbl = QLabel("")
        tb.addWidget(self.user_lbl)
        self.act_sign_out = QAction("Sign out", self)
        self.act_sign_out.triggered.connect(self._on_sign_out)
        tb.addAction(self.act_sign_out)
        self.addToolBar(tb)

        # ---------- Status bar ----------
        sb = QStatusBar(self)
        self.clock_lbl = QLabel("")
        sb.addPermanentWidget(self.clock_lbl)
        self.setStatusBar(sb)

        self.timer = QTimer(self)
        self.timer.timeout.connect(self._tick_clock)
        self.timer.start(1000)

        self._refresh_identity()

    async def start(self) -> None:
        """Subscribe to auth changes and run the start-up session check."""

        await self.watcher.start()
        if not self.context.is_authenticated:
            self.pages.setCurrentWidget(self.sign_in_page)

    # ===== Navigation =====
    def show_sign_in(self) -> None:
        self.sign_in_page.reset()
        self.pages.setCurrentWidget(self.sign_in_page)
        self.notifier.notify(msg.Notification(msg.AUTH_REQUIRED_TITLE, msg.SIGN_IN_PROMPT))

    def _on_session(self, transition: SessionTransition) -> None:
        self._refresh_identity()
        if transition.current is not None:
            self.pages.setCurrentWidget(self.employees_page)

    def _refresh_identity(self) -> None:
        s = self.context.current
        self.user_lbl.setText(f"Signed in as {s.username} ({s.account_id})  " if s else "Not signed in  ")
        self.act_sign_out.setEnabled(s is not None)

    def _tick_clock(self) -> None:
        self.clock_lbl.setText(datetime.now().strftime("%Y-%m-%d %H:%M:%S"))

    # ===== Sign in / out =====
    def _on_sign_in_requested(self, username: str, password: str, account: str) -> None:
        self.sign_in_page.set_busy(True)
        asyncio.ensure_future(self._sign_in(username, password, account))

    async def _sign_in(self, username: str, password: str, account: str) -> None:
        try:
            await self._provider.sign_in(username, password, account)
        except AuthError as exc:
            self.notifier.notify(msg.error(str(exc), title="Sign in failed"))
        except APIError:
            logger.exception("Sign in failed")
            self.notifier.notify(msg.error("Could not reach the server.", title="Sign in failed"))
        finally:
            self.sign_in_page.set_busy(False)

    def _on_sign_out(self) -> None:
        asyncio.ensure_future(self._provider.sign_out())

    # ===== Records =====
    def _open_editor(self, record: EmployeeRecord | None) -> None:
        editor = RecordEditor(self._api, self.context, self.notifier, record)
        dlg = EmployeeFormDialog(editor, self)
        dlg.completed.connect(self._on_mutation)
        dlg.open()

    def _on_delete_requested(self, record_id: int) -> None:
        asyncio.ensure_future(self._delete(record_id))

    async def _delete(self, record_id: int) -> None:
        result = await self.deleter.delete(record_id)
        await self.refresher.consume(result)

    def _on_mutation(self, result: MutationResult) -> None:
        asyncio.ensure_future(self.refresher.consume(result))

    # ===== Teardown =====
    def closeEvent(self, ev):  # type: ignore[override]
        self.watcher.stop()
        self.redirect.close()
        self.refresher.close()
        self._unsubscribe()
        self.timer.stop()
        asyncio.ensure_future(self._api.close())
        super().closeEvent(ev)
