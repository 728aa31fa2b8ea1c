"""
PubNub subscriber trigger data models for Automata Parameter Workflows
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class PubNubTriggerSettings(BaseModel):
    """Trigger-level settings declared in the trigger metadata."""

    publish_key: StrictStr = Field(
        ..., alias="publishKey", min_length=1, description="PubNub publish key"
    )
    subscribe_key: StrictStr = Field(
        ..., alias="subscribeKey", min_length=1, description="PubNub subscribe key"
    )
    uuid: StrictStr | None = Field(
        default=None, description="Client instance identifier"
    )

    model_config = ConfigDict(populate_by_name=True)


class HandlerSettings(BaseModel):
    """Per-handler settings declared in the trigger metadata."""

    channel: StrictStr = Field(
        ..., min_length=1, description="Channel whose messages this handler receives"
    )


class SubscriptionMessage(BaseModel):
    """Output record handed to a handler for every delivered message."""

    message: Any = Field(default=None, description="Message payload")
    channel: str = Field(..., description="Channel the message was published on")
    subscription: str | None = Field(
        default=None, description="Subscription (channel group or wildcard) matched"
    )
    publisher: str | None = Field(default=None, description="Publisher UUID")
    time_token: str = Field(..., alias="timeToken", description="Publish time token")

    model_config = ConfigDict(populate_by_name=True)
