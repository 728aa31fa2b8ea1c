"""
Data models and schemas for Automata Parameter Workflows

This package contains Pydantic models for all input/output data structures
used by the parameter store activity and the PubNub subscriber trigger.
"""

__version__ = "0.1.0"

# Parameter Store Models
from .ssm import (
    AWSCredentials,
    ParameterActionRequest,
    ParameterActionResult,
    ParameterType,
    RetrieveParameterInput,
    SSMAction,
    StoreParameterInput,
)

# PubNub Models
from .pubsub import (
    HandlerSettings,
    PubNubTriggerSettings,
    SubscriptionMessage,
)

__all__ = [
    # Parameter Store
    "AWSCredentials",
    "ParameterActionRequest",
    "ParameterActionResult",
    "ParameterType",
    "RetrieveParameterInput",
    "SSMAction",
    "StoreParameterInput",
    # PubNub
    "HandlerSettings",
    "PubNubTriggerSettings",
    "SubscriptionMessage",
]
