"""
Event channel module for eventchannel.

This module provides the Channel class, a typed in-process event emitter with
persistent and one-shot subscriptions and synchronous dispatch.
"""

import logging
from typing import Callable, Generic, List, Tuple, TypeVar

from eventchannel.interface import Handler, Subscription, SubscriptionMode

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Channel(Generic[T]):
    """Typed event channel delivering each dispatched value to its subscribers.

    Subscribers are called synchronously, in the order they subscribed, on the
    thread that calls dispatch.

    Features:
    - Persistent and one-shot subscriptions
    - Unsubscribe by handler or through the token returned on subscription
    - Re-entrant: handlers may subscribe, unsubscribe, clear or dispatch
      on the same channel while a dispatch is running

    Exceptions raised by a handler are not caught. They propagate to the
    caller of dispatch and the remaining handlers of that dispatch are skipped.
    """

    def __init__(self) -> None:
        """Initialize an empty channel."""
        self._subscriptions: List[Subscription[T]] = []

    @property
    def listeners(self) -> Tuple[Subscription[T], ...]:
        """Current subscriptions in dispatch order."""
        return tuple(self._subscriptions)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __contains__(self, handler: object) -> bool:
        return any(s.matches(handler) for s in self._subscriptions)

    def subscribe(self, handler: Handler[T]) -> Callable[[], None]:
        """Subscribe a handler to every future dispatch.

        Args:
            handler: Function to call with each dispatched value

        Returns:
            A function that can be called to unsubscribe the handler
        """
        return self._add(SubscriptionMode.PERSISTENT, handler)

    def subscribe_once(self, handler: Handler[T]) -> Callable[[], None]:
        """Subscribe a handler to the next dispatch only.

        Args:
            handler: Function to call with the next dispatched value

        Returns:
            A function that can be called to unsubscribe the handler
        """
        return self._add(SubscriptionMode.ONCE, handler)

    def _add(self, mode: SubscriptionMode, handler: Handler[T]) -> Callable[[], None]:
        self._subscriptions.append(Subscription(mode=mode, handler=handler))
        logger.debug(
            "Subscribed %r (%s), %d subscription(s)", handler, mode.value, len(self)
        )

        # Return an unsubscribe function
        def unsubscribe() -> None:
            self.unsubscribe(handler)

        return unsubscribe

    def unsubscribe(self, handler: Handler[T]) -> None:
        """Remove every subscription of a handler, whatever its mode.

        Args:
            handler: The handler passed to subscribe or subscribe_once

        Note:
            A handler subscribed several times is removed entirely by one call.
            Unknown handlers are ignored.
        """
        remaining = [s for s in self._subscriptions if not s.matches(handler)]
        removed = len(self._subscriptions) - len(remaining)
        self._subscriptions = remaining
        if removed:
            logger.debug(
                "Unsubscribed %r, removed %d subscription(s)", handler, removed
            )

    def dispatch(self, value: T) -> None:
        """Deliver a value to all current subscribers.

        Args:
            value: The value passed to each handler

        Note:
            Handlers are taken from a snapshot made before any of them runs,
            so subscriptions added during the dispatch only see later ones.
            One-shot subscriptions are removed before the first handler is
            called, which keeps them from firing twice when a handler
            dispatches again.
        """
        current = list(self._subscriptions)
        self._subscriptions = [
            s for s in self._subscriptions if s.mode is not SubscriptionMode.ONCE
        ]
        logger.debug("Dispatching to %d handler(s)", len(current))

        for subscription in current:
            subscription.handler(value)

    def clear(self) -> None:
        """Remove all subscriptions."""
        self._subscriptions = []
        logger.debug("Cleared all subscriptions")

    # Emitter-style spellings, each delegating to the method above

    def on(self, handler: Handler[T]) -> Callable[[], None]:
        return self.subscribe(handler)

    def once(self, handler: Handler[T]) -> Callable[[], None]:
        return self.subscribe_once(handler)

    def off(self, handler: Handler[T]) -> None:
        self.unsubscribe(handler)

    def fire(self, value: T) -> None:
        self.dispatch(value)

    def remove_all_listeners(self) -> None:
        self.clear()
