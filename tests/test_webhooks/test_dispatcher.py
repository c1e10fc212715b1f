"""Tests for webhook dispatcher module."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from structlog.testing import capture_logs

from giteahook.events import GiteaEvent
from giteahook.payloads import IssuePayload, PushPayload
from giteahook.webhooks.dispatcher import (
    EventDispatcher,
    get_event_dispatcher,
    set_event_dispatcher,
)

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def dispatcher():
    """Create test event dispatcher."""
    return EventDispatcher()


@pytest.fixture
def push_payload():
    """Create a sample push payload."""
    return PushPayload(ref="refs/heads/master")


@pytest.fixture
def issue_payload():
    """Create a sample issue payload."""
    return IssuePayload(action="opened", number=1)


# ============================================================================
# Listener Tests
# ============================================================================


class TestListeners:
    """Tests for listener registration."""

    def test_add_listener(self, dispatcher):
        """Test adding a listener for one event kind."""
        listener = MagicMock()

        dispatcher.add_listener(listener, GiteaEvent.PUSH)

        assert dispatcher.listeners_for(GiteaEvent.PUSH) == [listener]
        assert dispatcher.listeners_for(GiteaEvent.ISSUES) == []

    def test_add_global_listener(self, dispatcher):
        """Test that a listener without an event kind receives all kinds."""
        listener = MagicMock()

        dispatcher.add_listener(listener)

        assert dispatcher.listeners_for(GiteaEvent.PUSH) == [listener]
        assert dispatcher.listeners_for(GiteaEvent.RELEASE) == [listener]

    def test_specific_listeners_first(self, dispatcher):
        global_listener = MagicMock()
        push_listener = MagicMock()

        dispatcher.add_listener(global_listener)
        dispatcher.add_listener(push_listener, GiteaEvent.PUSH)

        assert dispatcher.listeners_for(GiteaEvent.PUSH) == [push_listener, global_listener]

    def test_remove_listener(self, dispatcher):
        """Test removing a listener."""
        listener = MagicMock()
        dispatcher.add_listener(listener, GiteaEvent.PUSH)

        dispatcher.remove_listener(listener, GiteaEvent.PUSH)

        assert dispatcher.listeners_for(GiteaEvent.PUSH) == []

    def test_remove_unknown_listener(self, dispatcher):
        """Test that removing an unregistered listener is a no-op."""
        dispatcher.remove_listener(MagicMock(), GiteaEvent.PUSH)

        assert dispatcher.listeners_for(GiteaEvent.PUSH) == []


# ============================================================================
# Dispatch Tests
# ============================================================================


class TestDispatch:
    """Tests for payload dispatch."""

    @pytest.mark.asyncio
    async def test_dispatch_sync_listener(self, dispatcher, push_payload):
        listener = MagicMock(return_value=None)
        dispatcher.add_listener(listener, GiteaEvent.PUSH)

        delivered = await dispatcher.dispatch(push_payload)

        assert delivered == 1
        listener.assert_called_once_with(push_payload)

    @pytest.mark.asyncio
    async def test_dispatch_async_listener(self, dispatcher, push_payload):
        listener = AsyncMock()
        dispatcher.add_listener(listener, GiteaEvent.PUSH)

        delivered = await dispatcher.dispatch(push_payload)

        assert delivered == 1
        listener.assert_awaited_once_with(push_payload)

    @pytest.mark.asyncio
    async def test_dispatch_by_event_kind(self, dispatcher, push_payload, issue_payload):
        push_listener = AsyncMock()
        issue_listener = AsyncMock()
        dispatcher.add_listener(push_listener, GiteaEvent.PUSH)
        dispatcher.add_listener(issue_listener, GiteaEvent.ISSUES)

        await dispatcher.dispatch(issue_payload)

        push_listener.assert_not_awaited()
        issue_listener.assert_awaited_once_with(issue_payload)

    @pytest.mark.asyncio
    async def test_dispatch_without_listeners(self, dispatcher, push_payload):
        assert await dispatcher.dispatch(push_payload) == 0

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_stop_others(self, dispatcher, push_payload):
        """Test that one listener error is isolated from the rest."""
        failing = AsyncMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock(return_value=None)
        dispatcher.add_listener(failing, GiteaEvent.PUSH)
        dispatcher.add_listener(healthy)

        delivered = await dispatcher.dispatch(push_payload)

        assert delivered == 1
        healthy.assert_called_once_with(push_payload)

    @pytest.mark.asyncio
    async def test_listener_error_logged(self, push_payload):
        with capture_logs() as logs:
            dispatcher = EventDispatcher()
            dispatcher.add_listener(AsyncMock(side_effect=RuntimeError("boom")))

            delivered = await dispatcher.dispatch(push_payload)

        entry = next(e for e in logs if e["event"] == "listener_error")
        assert delivered == 0
        assert entry["event_kind"] == "push"
        assert entry["error"] == "boom"


# ============================================================================
# Global Instance Tests
# ============================================================================


class TestGlobalDispatcher:
    """Tests for the global dispatcher instance."""

    def test_get_returns_singleton(self):
        set_event_dispatcher(None)

        first = get_event_dispatcher()
        second = get_event_dispatcher()

        assert first is second
        set_event_dispatcher(None)

    def test_set_dispatcher(self):
        custom = EventDispatcher()

        set_event_dispatcher(custom)

        assert get_event_dispatcher() is custom
        set_event_dispatcher(None)
