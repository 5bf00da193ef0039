"""
Client configuration.

Each setting is resolved by priority:
1. Environment variable (a ``.env`` file in the working directory is loaded first)
2. staffdesk/config.json
3. Built-in default
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULT_API_BASE_URL = "http://127.0.0.1:8000"
DEFAULT_SESSION_FILE = Path.home() / ".staffdesk" / "session.json"
DEFAULT_REQUEST_TIMEOUT = 10.0


@dataclass(frozen=True)
class ClientSettings:
    api_base_url: str = DEFAULT_API_BASE_URL
    session_file: Path = DEFAULT_SESSION_FILE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def _read_config_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        # A broken config file falls back to env/defaults
        logger.warning("Ignoring unreadable config file %s", path)
        return {}
    return data if isinstance(data, dict) else {}


def load_settings(
    config_path: Optional[Path] = None,
    api_base_url: Optional[str] = None,
) -> ClientSettings:
    """Build ClientSettings from env vars, config.json and defaults.

    ``api_base_url`` (e.g. from the command line) wins over everything.
    """

    load_dotenv()
    data = _read_config_json(config_path or CONFIG_PATH)

    base_url = (
        api_base_url
        or os.getenv("STAFFDESK_API_BASE_URL")
        or data.get("api_base_url")
        or DEFAULT_API_BASE_URL
    )
    session_file = os.getenv("STAFFDESK_SESSION_FILE") or data.get("session_file")
    timeout = os.getenv("STAFFDESK_REQUEST_TIMEOUT") or data.get("request_timeout")

    try:
        request_timeout = float(timeout) if timeout else DEFAULT_REQUEST_TIMEOUT
    except (TypeError, ValueError):
        logger.warning("Invalid request timeout %r, using %s", timeout, DEFAULT_REQUEST_TIMEOUT)
        request_timeout = DEFAULT_REQUEST_TIMEOUT

    return ClientSettings(
        api_base_url=str(base_url).rstrip("/"),
        session_file=Path(session_file).expanduser() if session_file else DEFAULT_SESSION_FILE,
        request_timeout=request_timeout,
    )
