"""
Eventchannel - A typed in-process event channel.

This package provides a small synchronous publish/subscribe primitive with
persistent and one-shot subscriptions.
"""

from .event import Channel
from .interface import Handler, Subscribable, Subscription, SubscriptionMode

__version__ = "0.1.0"
__all__ = ["Channel", "Handler", "Subscribable", "Subscription", "SubscriptionMode"]
