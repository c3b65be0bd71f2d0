"""
Subscription contract for eventchannel.

This module declares the handler type, the subscription record and the
Subscribable protocol that every channel implementation satisfies.
"""

from dataclasses import dataclass
from enum import Enum
from types import BuiltinMethodType, MethodType
from typing import Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

Handler = Callable[[T], None]


class SubscriptionMode(str, Enum):
    """Delivery mode of a subscription."""

    PERSISTENT = "on"
    ONCE = "once"


@dataclass(frozen=True)
class Subscription(Generic[T]):
    """A registered handler together with its delivery mode.

    Subscriptions carry no identifier of their own. They are removed by
    handler, so two subscriptions of the same handler are both dropped by
    a single unsubscribe call.

    Args:
        mode: Whether the handler stays registered after a dispatch
        handler: Callable invoked with each dispatched value
    """

    mode: SubscriptionMode
    handler: Handler[T]

    def matches(self, handler: Handler[T]) -> bool:
        """Tell whether this subscription was registered with ``handler``.

        Handlers are matched by identity, never through their ``__eq__``.
        Bound methods are re-created on every attribute access, so two bound
        methods match when they bind the same function to the same object.
        """
        return same_handler(self.handler, handler)


def same_handler(registered: Callable[..., Any], handler: Callable[..., Any]) -> bool:
    if registered is handler:
        return True
    if isinstance(registered, MethodType) and isinstance(handler, MethodType):
        return (
            registered.__self__ is handler.__self__
            and registered.__func__ is handler.__func__
        )
    if isinstance(registered, BuiltinMethodType) and isinstance(
        handler, BuiltinMethodType
    ):
        # e.g. list.append bound to a specific list
        return (
            registered.__self__ is handler.__self__
            and registered.__name__ == handler.__name__
        )
    return False


@runtime_checkable
class Subscribable(Protocol[T]):
    """Anything handlers can subscribe to and values can be dispatched through."""

    def subscribe(self, handler: Handler[T]) -> Callable[[], None]:
        ...

    def subscribe_once(self, handler: Handler[T]) -> Callable[[], None]:
        ...

    def unsubscribe(self, handler: Handler[T]) -> None:
        ...

    def dispatch(self, value: T) -> None:
        ...

    def clear(self) -> None:
        ...
