"""
PubNub subscriber trigger.

Subscribes to the channels of the registered handlers and hands every
delivered message to the handler of its channel. Delivery semantics are the
PubNub client's: nothing is buffered, reordered, retried or deduplicated here.
"""

import asyncio
import inspect
import uuid
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import structlog
from pubnub.callbacks import SubscribeCallback
from pubnub.enums import PNStatusCategory
from pubnub.pnconfiguration import PNConfiguration
from pubnub.pubnub_asyncio import PubNubAsyncio
from pydantic import ValidationError

from shared.errors import TriggerConfigurationError
from shared.models.pubsub import (
    HandlerSettings,
    PubNubTriggerSettings,
    SubscriptionMessage,
)

logger = structlog.get_logger(__name__)

MessageHandler = Callable[[SubscriptionMessage], Awaitable[Any]]

TRIGGER_METADATA: dict[str, Any] = {
    "name": "pubnub-subscriber",
    "type": "flogo:trigger",
    "version": "0.2.0",
    "title": "Receive PubNub Messages",
    "description": "PubNub Subscriber",
    "settings": [
        {"name": "publishKey", "type": "string", "required": True},
        {"name": "subscribeKey", "type": "string", "required": True},
        {"name": "uuid", "type": "string", "required": False},
    ],
    "output": [
        {"name": "message", "type": "any"},
        {"name": "channel", "type": "string"},
        {"name": "subscription", "type": "string"},
        {"name": "publisher", "type": "string"},
        {"name": "timeToken", "type": "string"},
    ],
    "handler": {
        "settings": [
            {"name": "channel", "type": "string", "required": True},
        ]
    },
}


def _validate_settings(model, data, kind: str):
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise TriggerConfigurationError(
            f"Invalid {kind} settings for {TRIGGER_METADATA['name']}: {', '.join(fields)}"
        ) from e


def to_subscription_message(event: Any) -> SubscriptionMessage:
    """Map a PubNub message result onto the trigger's output record."""
    return SubscriptionMessage(
        message=event.message,
        channel=event.channel,
        subscription=event.subscription,
        publisher=event.publisher,
        time_token=str(event.timetoken),
    )


class SubscriptionListener(SubscribeCallback):
    """PubNub listener forwarding message events to the trigger."""

    def __init__(self, trigger: "PubNubSubscriberTrigger"):
        super().__init__()
        self.trigger = trigger

    def status(self, pubnub, status):
        category = status.category
        if status.is_error():
            logger.error(f"PubNub status error: {category}", error_data=str(status.error_data))
        elif category == PNStatusCategory.PNConnectedCategory:
            logger.info("PubNub subscription connected", channels=status.affected_channels)
        elif category in (
            PNStatusCategory.PNUnexpectedDisconnectCategory,
            PNStatusCategory.PNDisconnectedCategory,
        ):
            logger.warning(f"PubNub subscription disconnected: {category}")
        else:
            logger.debug(f"PubNub status: {category}")

    def presence(self, pubnub, presence):
        pass

    def message(self, pubnub, message):
        self.trigger.dispatch(to_subscription_message(message))


class PubNubSubscriberTrigger:
    """Receive PubNub messages and hand them to per-channel handlers."""

    def __init__(
        self,
        settings: Mapping[str, Any] | PubNubTriggerSettings,
        pubnub_factory: Callable[[PNConfiguration], Any] = PubNubAsyncio,
    ):
        self.settings = _validate_settings(PubNubTriggerSettings, settings, "trigger")
        self._pubnub_factory = pubnub_factory
        self._handlers: dict[str, MessageHandler] = {}
        self._tasks: set[asyncio.Task] = set()
        self._pubnub: Any = None
        self.listener = SubscriptionListener(self)

    @property
    def channels(self) -> list[str]:
        return list(self._handlers)

    def add_handler(
        self, settings: Mapping[str, Any] | HandlerSettings, handler: MessageHandler
    ) -> None:
        """Register the handler for a channel, replacing any previous one."""
        handler_settings = _validate_settings(HandlerSettings, settings, "handler")
        if handler_settings.channel in self._handlers:
            logger.warning(f"Replacing handler for channel '{handler_settings.channel}'")
        self._handlers[handler_settings.channel] = handler

    def build_configuration(self) -> PNConfiguration:
        pnconfig = PNConfiguration()
        pnconfig.publish_key = self.settings.publish_key
        pnconfig.subscribe_key = self.settings.subscribe_key
        pnconfig.user_id = self.settings.uuid or f"pn-{uuid.uuid4()}"
        return pnconfig

    async def start(self) -> None:
        """Open one subscription covering every registered channel."""
        if not self._handlers:
            raise TriggerConfigurationError(
                f"{TRIGGER_METADATA['name']} has no handlers registered"
            )

        self._pubnub = self._pubnub_factory(self.build_configuration())
        self._pubnub.add_listener(self.listener)
        self._pubnub.subscribe().channels(self.channels).execute()

        logger.info(f"Subscribed to PubNub channels: {', '.join(self.channels)}")

    async def stop(self) -> None:
        """Unsubscribe, wait for in-flight handlers and stop the client."""
        if self._pubnub is None:
            return

        self._pubnub.unsubscribe_all()
        await self.drain()

        stopped = self._pubnub.stop()
        if inspect.isawaitable(stopped):
            await stopped
        self._pubnub = None

        logger.info("PubNub subscriber stopped")

    async def drain(self) -> None:
        """Wait until every dispatched handler has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def dispatch(self, record: SubscriptionMessage) -> asyncio.Task | None:
        """Start the handler for a delivered message as its own task."""
        handler = self._handlers.get(record.channel)
        if handler is None and record.subscription:
            handler = self._handlers.get(record.subscription)

        if handler is None:
            logger.warning(
                f"No handler registered for channel '{record.channel}', dropping message",
                time_token=record.time_token,
            )
            return None

        task = asyncio.get_running_loop().create_task(self._run_handler(handler, record))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_handler(self, handler: MessageHandler, record: SubscriptionMessage) -> None:
        try:
            await handler(record)
        except Exception as e:
            logger.error(
                f"Handler for channel '{record.channel}' failed: {e}",
                time_token=record.time_token,
            )
