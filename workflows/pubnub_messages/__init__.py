"""
PubNub Message Workflows

Workflows started by the PubNub subscriber trigger.
"""

from .pubnub_message_workflow import PubNubMessageWorkflow

__all__ = [
    "PubNubMessageWorkflow",
]
