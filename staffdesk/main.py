"""Command-line entry point for the StaffDesk client."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Sequence

from .core.config import load_settings
from .services.api_client import APIClient, APIError

logger = logging.getLogger("staffdesk")


async def _check_backend(client: APIClient) -> bool:
    try:
        status = await client.health()
    except APIError as exc:
        logger.error("Backend at %s is not reachable: %s", client.base_url, exc)
        return False
    finally:
        await client.close()
    logger.info("Backend at %s: %s", client.base_url, status.get("status", "unknown"))
    return True


def main(argv: Sequence[str] | None = None) -> int:
    """Parse CLI arguments and dispatch to the requested workflow."""

    parser = argparse.ArgumentParser(
        prog="staffdesk",
        description="Run the StaffDesk employee management client.",
    )
    parser.add_argument(
        "--api-base-url",
        help="Backend URL (overrides STAFFDESK_API_BASE_URL and config.json).",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check that the backend answers /health and exit.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO).",
    )

    args = parser.parse_args(None if argv is None else list(argv))

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    settings = load_settings(api_base_url=args.api_base_url)

    if args.check:
        client = APIClient(settings.api_base_url, timeout=settings.request_timeout)
        return 0 if asyncio.run(_check_backend(client)) else 1

    from .app import run_app

    return run_app(settings)


if __name__ == "__main__":
    raise SystemExit(main())
