"""
Typed event bus for decoupled communication.

Uses Enums for event types to prevent magic strings. Events published
while a dispatch is already running are queued and delivered, in
publish order, once the in-flight dispatch completes.

Usage:
    # Subscribe
    event_bus.subscribe(ProgressionEvent.SKILL_UNLOCKED, on_skill_unlocked)

    # Publish
    event_bus.publish(ProgressionEvent.SKILL_UNLOCKED, skill_id="vitality_1")
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class ProgressionEvent(Enum):
    """Events published by the progression engine."""
    SKILL_UNLOCKED = auto()
    SKILL_UNLOCK_UNDONE = auto()
    SKILLS_RESET = auto()


class PlayerEvent(Enum):
    """Events published by the reference player system."""
    XP_CHANGED = auto()
    HEALTH_CHANGED = auto()
    EFFECT_APPLIED = auto()
    EFFECT_EXPIRED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
        consumed: Whether the event has been handled
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Mark event as consumed (stops propagation)."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        """Get event data by key."""
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Get event data by key (dict-style)."""
        return self.data[key]


# Type alias for event handlers
EventHandler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for publish/subscribe messaging.

    Features:
    - Typed events (Enum-based)
    - Priority ordering (equal priorities keep subscription order)
    - Weak references (auto-cleanup when handlers are deleted)
    - One-shot handlers
    - Event consumption (stops propagation)
    - Re-entrant publishes are queued, not nested
    """

    def __init__(self):
        # Map of event type -> list of (priority, handler, one_shot)
        self._handlers: dict[Enum, list[tuple[int, Any, bool]]] = {}
        # Queue for events published during handling
        self._event_queue: deque[Event] = deque()
        self._is_publishing = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first (default 0)
            one_shot: If True, handler is removed after first call
            weak: If True, use weak reference (handler auto-removed if deleted).
                  Lambdas must be subscribed with weak=False.
        """
        if weak:
            if hasattr(handler, '__self__'):
                # Method - use WeakMethod
                handler_ref: Any = WeakMethod(handler)
            else:
                # Function - use regular ref
                handler_ref = ref(handler)
        else:
            handler_ref = handler

        handlers = self._handlers.setdefault(event_type, [])
        entry = (priority, handler_ref, one_shot)

        # Insert after every handler with priority >= ours
        insert_idx = len(handlers)
        for i, (p, _, _) in enumerate(handlers):
            if priority > p:
                insert_idx = i
                break

        handlers.insert(insert_idx, entry)

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """
        Unsubscribe from an event type.

        Args:
            event_type: The event type
            handler: The handler to remove
        """
        if event_type not in self._handlers:
            return

        self._handlers[event_type] = [
            (p, h, o) for p, h, o in self._handlers[event_type]
            if self._get_handler(h) != handler
        ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Args:
            event_type: The event type
            **data: Event data as keyword arguments

        Returns:
            The Event object (check .consumed to see if it was handled).
            Events queued behind an in-flight dispatch are delivered later.
        """
        event = Event(type=event_type, data=data)
        self.publish_event(event)
        return event

    def publish_event(self, event: Event) -> None:
        """
        Publish a pre-created event.

        Args:
            event: The event to publish
        """
        if self._is_publishing:
            self._event_queue.append(event)
            return

        self._dispatch(event)

        # Drain events published by handlers, in publish order
        while self._event_queue:
            self._dispatch(self._event_queue.popleft())

    @property
    def pending_count(self) -> int:
        """Number of events waiting behind the current dispatch."""
        return len(self._event_queue)

    def subscriber_count(self, event_type: Enum | None = None) -> int:
        """Count live handlers for one event type, or for all types."""
        if event_type is None:
            return sum(self.subscriber_count(t) for t in self._handlers)
        return sum(
            1 for _, h, _ in self._handlers.get(event_type, [])
            if self._get_handler(h) is not None
        )

    def clear(self, event_type: Enum | None = None) -> None:
        """
        Clear handlers.

        Args:
            event_type: If specified, only clear handlers for this type.
                       If None, clear all handlers and pending events.
        """
        if event_type is None:
            self._handlers.clear()
            self._event_queue.clear()
        elif event_type in self._handlers:
            del self._handlers[event_type]

    def _dispatch(self, event: Event) -> None:
        """Dispatch event to handlers."""
        handlers = self._handlers.get(event.type)
        if not handlers:
            return

        self._is_publishing = True
        to_remove = []

        try:
            # Iterate a snapshot so handlers may (un)subscribe safely
            for entry in list(handlers):
                _, handler_ref, one_shot = entry
                handler = self._get_handler(handler_ref)

                if handler is None:
                    # Weak reference was garbage collected
                    to_remove.append(entry)
                    continue

                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Error in event handler for {event.type}")

                if one_shot:
                    to_remove.append(entry)

                if event.consumed:
                    break
        finally:
            self._is_publishing = False

        current = self._handlers.get(event.type)
        if current is not None and to_remove:
            # By identity: a handler re-subscribed during dispatch has an equal entry
            self._handlers[event.type] = [
                e for e in current if not any(e is r for r in to_remove)
            ]

    def _get_handler(self, handler_ref: Any) -> EventHandler | None:
        """Resolve handler from reference."""
        if isinstance(handler_ref, (ref, WeakMethod)):
            return handler_ref()
        return handler_ref
