"""In-process fan-out of decoded webhook payloads.

Applications register listeners per event kind; the HTTP endpoint hands
every successfully decoded payload to the dispatcher.
"""

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from giteahook.events import GiteaEvent
from giteahook.payloads.events import GiteaPayload

logger = structlog.get_logger(__name__)

# Type for payload listeners
PayloadListener = Callable[[GiteaPayload], Awaitable[None] | None]


class EventDispatcher:
    """Routes decoded payloads to registered listeners.

    Listeners registered without an event kind receive every payload.
    A failing listener is logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._listeners: dict[GiteaEvent | None, list[PayloadListener]] = {}
        self._logger = logger.bind(component="event_dispatcher")

    def add_listener(
        self,
        listener: PayloadListener,
        event: GiteaEvent | None = None,
    ) -> None:
        """Add a payload listener.

        Args:
            listener: Async or sync function to call with payloads.
            event: Event kind to listen for (all kinds if not provided).
        """
        self._listeners.setdefault(event, []).append(listener)

    def remove_listener(
        self,
        listener: PayloadListener,
        event: GiteaEvent | None = None,
    ) -> None:
        """Remove a payload listener.

        Args:
            listener: Listener to remove.
            event: Event kind it was registered for.
        """
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)

    def listeners_for(self, event: GiteaEvent) -> list[PayloadListener]:
        """Listeners that should receive a payload of the given kind."""
        return [*self._listeners.get(event, []), *self._listeners.get(None, [])]

    async def dispatch(self, payload: GiteaPayload) -> int:
        """Notify listeners about a decoded payload.

        Args:
            payload: Decoded payload.

        Returns:
            Number of listeners that completed without error.
        """
        listeners = self.listeners_for(payload.event)
        if not listeners:
            self._logger.debug("no_listeners_registered", event_kind=payload.event.value)
            return 0

        delivered = 0
        for listener in listeners:
            try:
                result = listener(payload)
                if asyncio.iscoroutine(result):
                    await result
                delivered += 1
            except Exception as e:
                self._logger.warning(
                    "listener_error",
                    event_kind=payload.event.value,
                    error=str(e),
                )

        self._logger.debug(
            "payload_dispatched",
            event_kind=payload.event.value,
            listener_count=len(listeners),
            delivered=delivered,
        )
        return delivered


_event_dispatcher: EventDispatcher | None = None


def get_event_dispatcher() -> EventDispatcher:
    """Get the global event dispatcher instance.

    Returns:
        Singleton EventDispatcher.
    """
    global _event_dispatcher
    if _event_dispatcher is None:
        _event_dispatcher = EventDispatcher()
    return _event_dispatcher


def set_event_dispatcher(dispatcher: EventDispatcher | None) -> None:
    """Set the global event dispatcher instance.

    Useful for testing.

    Args:
        dispatcher: EventDispatcher instance, or None to reset.
    """
    global _event_dispatcher
    _event_dispatcher = dispatcher
