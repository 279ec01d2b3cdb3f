"""
Event bus connecting the game core to whatever presents it.

Battles and the save manager announce what happened here; a UI or a
logger subscribes to the Enum members it cares about. Nothing in the
core waits on a subscriber.

Usage:
    class BattleEvent(Enum):
        STARTED = auto()
        ACTION = auto()

    bus = EventBus()
    bus.subscribe(BattleEvent.ACTION, log_panel.on_action)
    bus.publish(BattleEvent.ACTION, result=result)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """
    One published occurrence.

    Attributes:
        type: Enum member naming what happened
        data: Keyword payload given to ``publish``
        consumed: Set by a handler to keep lower-priority handlers out
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass(eq=False)
class Subscription:
    """A handler registered for one event type."""
    target: Union[EventHandler, ref, WeakMethod]
    priority: int = 0
    one_shot: bool = False

    @classmethod
    def create(cls, handler: EventHandler, priority: int, one_shot: bool, weak: bool) -> Subscription:
        if not weak:
            target = handler
        elif hasattr(handler, '__self__'):
            # Bound methods die with their instance, not with the method object
            target = WeakMethod(handler)
        else:
            target = ref(handler)
        return cls(target=target, priority=priority, one_shot=one_shot)

    def resolve(self) -> Optional[EventHandler]:
        """The live handler, or None once a weakly held one is gone."""
        if isinstance(self.target, (ref, WeakMethod)):
            return self.target()
        return self.target


class EventBus:
    """
    Publish/subscribe hub keyed by Enum members.

    Handlers run highest priority first (ties in subscription order).
    Handlers are held weakly unless asked otherwise, so a discarded
    listener simply stops receiving. A handler that raises is logged
    and the rest still run. Events published from inside a handler are
    delivered after the current one finishes.
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[Subscription]] = {}
        self._pending: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> Subscription:
        """
        Register a handler.

        Args:
            event_type: Enum member to listen for
            handler: Called with the Event
            priority: Higher runs earlier
            one_shot: Drop the handler after its first call
            weak: Hold the handler by weak reference (lambdas need False)

        Returns:
            The subscription record
        """
        subscription = Subscription.create(handler, priority, one_shot, weak)
        subscriptions = self._subscriptions.setdefault(event_type, [])

        position = next(
            (i for i, s in enumerate(subscriptions) if s.priority < priority),
            len(subscriptions),
        )
        subscriptions.insert(position, subscription)
        return subscription

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove every registration of ``handler`` for ``event_type``."""
        subscriptions = self._subscriptions.get(event_type)
        if subscriptions is None:
            return
        subscriptions[:] = [s for s in subscriptions if s.resolve() != handler]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Announce an event.

        Returns:
            The Event, so the caller can check ``consumed``
        """
        event = Event(type=event_type, data=data)

        if self._dispatching:
            self._pending.append(event)
            return event

        self._deliver(event)
        while self._pending:
            self._deliver(self._pending.pop(0))
        return event

    def clear(self, event_type: Optional[Enum] = None) -> None:
        """Drop the handlers of one event type, or of all of them."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def handler_count(self, event_type: Enum) -> int:
        """Number of live handlers for an event type."""
        return sum(
            1 for s in self._subscriptions.get(event_type, [])
            if s.resolve() is not None
        )

    def _deliver(self, event: Event) -> None:
        subscriptions = self._subscriptions.get(event.type)
        if not subscriptions:
            return

        finished: list[Subscription] = []
        self._dispatching = True
        try:
            for subscription in list(subscriptions):
                handler = subscription.resolve()
                if handler is None:
                    finished.append(subscription)
                    continue

                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Handler for {event.type} failed")

                if subscription.one_shot:
                    finished.append(subscription)
                if event.consumed:
                    break
        finally:
            self._dispatching = False

        for subscription in finished:
            if subscription in subscriptions:
                subscriptions.remove(subscription)
