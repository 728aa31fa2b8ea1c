"""
Triggers for Automata Parameter Workflows

Triggers receive events from external services and hand them to handlers,
which usually start a Temporal workflow per event.
"""

from .handlers import WorkflowStartHandler
from .pubnub_subscriber import (
    TRIGGER_METADATA,
    PubNubSubscriberTrigger,
    SubscriptionListener,
)

__all__ = [
    "TRIGGER_METADATA",
    "PubNubSubscriberTrigger",
    "SubscriptionListener",
    "WorkflowStartHandler",
]
