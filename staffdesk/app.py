# staffdesk/app.py
import sys

from PySide6 import QtAsyncio
from PySide6.QtWidgets import QApplication

from .core.config import ClientSettings
from .services.api_client import APIClient
from .services.auth_provider import AuthProvider, SessionStore
from .ui.main_window import MainWindow


def run_app(settings: ClientSettings) -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("StaffDesk")
    app.setOrganizationName("StaffDesk")

    api = APIClient(settings.api_base_url, timeout=settings.request_timeout)
    provider = AuthProvider(api, SessionStore(settings.session_file))

    win = MainWindow(api, provider)
    win.show()

    # Qt drives the asyncio loop; keeps running after start() until the window closes
    QtAsyncio.run(win.start(), keep_running=True, quit_qapp=True, handle_sigint=True)
    return 0
