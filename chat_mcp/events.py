"""In-process event bus for chat and tool-call events."""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Set, Union


class EventName(str, Enum):
    """Observable events.

    Payloads: ``message`` a ChatMessage, ``toolCall`` a ToolCall,
    ``toolResult`` a ToolResult, ``error`` an MCPError and ``stateChange``
    a ChatState.
    """
    MESSAGE = "message"
    TOOL_CALL = "toolCall"
    TOOL_RESULT = "toolResult"
    ERROR = "error"
    STATE_CHANGE = "stateChange"


EventHandler = Callable[..., Any]


class EventBus:
    """Publish/subscribe over the fixed ``EventName`` vocabulary."""

    def __init__(self):
        self._listeners: Dict[EventName, Set[EventHandler]] = {
            event: set() for event in EventName
        }
        self.logger = logging.getLogger("event_bus")

    @staticmethod
    def _event(event_name: Union[EventName, str]) -> EventName:
        try:
            return EventName(event_name)
        except ValueError:
            valid = [event.value for event in EventName]
            raise ValueError(f"Unknown event '{event_name}'. Valid events: {valid}") from None

    def on(self, event_name: Union[EventName, str], handler: EventHandler) -> None:
        """Subscribe a handler; subscribing the same handler twice is a no-op."""
        self._listeners[self._event(event_name)].add(handler)

    def off(self, event_name: Union[EventName, str], handler: EventHandler) -> None:
        """Unsubscribe a handler if it is subscribed."""
        self._listeners[self._event(event_name)].discard(handler)

    def emit(self, event_name: Union[EventName, str], *payload: Any) -> None:
        """Invoke every subscriber synchronously.

        A failing subscriber is logged and does not affect the others or
        the emitter.
        """
        event = self._event(event_name)
        for handler in list(self._listeners[event]):
            try:
                handler(*payload)
            except Exception:
                self.logger.exception(f"Error in event handler for {event.value}")

    def listener_count(self, event_name: Union[EventName, str]) -> int:
        return len(self._listeners[self._event(event_name)])

    def clear(self) -> None:
        """Drop every subscriber of every event."""
        for listeners in self._listeners.values():
            listeners.clear()
