"""
Message Bus

Central hub for routing domain events to their handlers.
Events are published by the unit of work after commit.
"""

from typing import Dict, List, Callable, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class MessageBus:
    """
    Message bus for domain events

    Multiple handlers per event type (1:N). Handlers registered for a base
    class also receive its subclasses.
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[Callable]] = {}

    def register_event_handler(
        self,
        event_type: Type[DomainEvent],
        handler: Callable[[DomainEvent], None]
    ):
        """Register an event handler; registering the same handler twice is a no-op."""
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug("Registered event handler for %s", event_type.__name__)

    def handlers_for(self, event: DomainEvent) -> List[Callable]:
        matched: List[Callable] = []
        for event_type in type(event).__mro__:
            matched.extend(self._event_handlers.get(event_type, []))
        return matched

    def publish_events(self, events: List[DomainEvent]):
        """
        Publish domain events

        All registered handlers for each event type will be called.
        Errors in handlers are logged but don't stop other handlers.
        """
        for event in events:
            event_name = type(event).__name__
            handlers = self.handlers_for(event)

            if not handlers:
                logger.warning("No handlers registered for event %s", event_name)
                continue

            logger.info("Publishing event: %s (ID: %s)", event_name, event.event_id)

            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "Error in event handler %s for event %s",
                        getattr(handler, "__name__", repr(handler)), event_name,
                    )


# Process-wide bus; handlers are registered in AppConfig.ready()
message_bus = MessageBus()
