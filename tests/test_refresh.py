"""Tests for refetch-on-write and session-driven reloads."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from staffdesk.core.list_loader import RecordListLoader
from staffdesk.core.mutations import MutationKind, MutationResult, Outcome
from staffdesk.core.refresh import RefreshOrchestrator
from staffdesk.core.session import AuthEvent, Session


@pytest.fixture
def loader() -> MagicMock:
    double = MagicMock(spec=RecordListLoader)
    double.load = AsyncMock(return_value=[])
    return double


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", list(MutationKind))
async def test_success_triggers_one_reload(loader, kind) -> None:
    orchestrator = RefreshOrchestrator(loader)

    assert await orchestrator.consume(MutationResult.succeeded(kind, 1))
    loader.load.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("outcome", [Outcome.FAILED, Outcome.CANCELLED, Outcome.IGNORED])
async def test_other_outcomes_do_not_reload(loader, outcome) -> None:
    orchestrator = RefreshOrchestrator(loader)

    assert not await orchestrator.consume(MutationResult(MutationKind.CREATE, outcome))
    loader.load.assert_not_awaited()


@pytest.mark.asyncio
async def test_session_acquired_loads_and_lost_clears(loader, context, session: Session) -> None:
    orchestrator = RefreshOrchestrator(loader)
    orchestrator.watch_session(context)
    writer = context.claim_writer()

    writer.apply(AuthEvent.INITIAL_SESSION, session)
    await orchestrator.wait_idle()
    loader.load.assert_awaited_once()

    writer.apply(AuthEvent.TOKEN_REFRESHED, session)
    await orchestrator.wait_idle()
    assert loader.load.await_count == 1

    writer.apply(AuthEvent.SIGNED_OUT, None)
    loader.clear.assert_called_once()


@pytest.mark.asyncio
async def test_close_stops_watching(loader, context, session: Session) -> None:
    orchestrator = RefreshOrchestrator(loader)
    orchestrator.watch_session(context)
    orchestrator.close()

    context.claim_writer().apply(AuthEvent.SIGNED_IN, session)
    await orchestrator.wait_idle()
    loader.load.assert_not_awaited()


@pytest.mark.asyncio
async def test_user_switch_clears_before_reloading(loader, context, session: Session) -> None:
    orchestrator = RefreshOrchestrator(loader)
    orchestrator.watch_session(context)
    writer = context.claim_writer()
    writer.apply(AuthEvent.SIGNED_IN, session)
    await orchestrator.wait_idle()
    loader.clear.assert_not_called()

    writer.apply(AuthEvent.SIGNED_IN, Session(8, "next", session.account_id, "tok-8"))
    await orchestrator.wait_idle()

    loader.clear.assert_called_once()
    assert loader.load.await_count == 2
