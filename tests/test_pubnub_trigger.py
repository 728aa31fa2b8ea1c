"""
Tests for the PubNub subscriber trigger.

PubNub itself is replaced with a fake client; message events are delivered by
calling the trigger's listener the way the PubNub client does.
"""

import asyncio
from types import SimpleNamespace

import pytest
from pubnub.enums import PNStatusCategory
from structlog.testing import capture_logs

from conftest import FakePubNub, pubnub_message
from shared.errors import TriggerConfigurationError
from shared.models.pubsub import HandlerSettings, PubNubTriggerSettings, SubscriptionMessage
from shared.triggers.handlers import WorkflowStartHandler
from shared.triggers.pubnub_subscriber import TRIGGER_METADATA, PubNubSubscriberTrigger

SETTINGS = {"publishKey": "pub-c-123", "subscribeKey": "sub-c-456", "uuid": "worker-1"}


def _trigger():
    return PubNubSubscriberTrigger(SETTINGS, pubnub_factory=FakePubNub)


def _recorder(received):
    async def handler(record):
        received.append(record)

    return handler


def test_settings_match_metadata():
    declared = {s["name"] for s in TRIGGER_METADATA["settings"]}
    required = {s["name"] for s in TRIGGER_METADATA["settings"] if s["required"]}
    aliases = {f.alias or name for name, f in PubNubTriggerSettings.model_fields.items()}
    required_aliases = {
        f.alias or name for name, f in PubNubTriggerSettings.model_fields.items() if f.is_required()
    }

    assert declared == aliases
    assert required == required_aliases
    assert {s["name"] for s in TRIGGER_METADATA["handler"]["settings"]} == set(
        HandlerSettings.model_fields
    )


def test_output_record_matches_metadata():
    record = SubscriptionMessage(
        message={"k": 1}, channel="c", subscription=None, publisher="p", time_token="1"
    )

    assert set(record.model_dump(by_alias=True)) == {o["name"] for o in TRIGGER_METADATA["output"]}


def test_missing_subscribe_key_is_rejected():
    with pytest.raises(TriggerConfigurationError):
        PubNubSubscriberTrigger({"publishKey": "pub"}, pubnub_factory=FakePubNub)


def test_handler_requires_channel():
    trigger = _trigger()

    with pytest.raises(TriggerConfigurationError):
        trigger.add_handler({}, _recorder([]))


def test_start_without_handlers_fails():
    with pytest.raises(TriggerConfigurationError):
        asyncio.run(_trigger().start())


def test_start_subscribes_all_channels_once():
    async def scenario():
        trigger = _trigger()
        trigger.add_handler({"channel": "orders"}, _recorder([]))
        trigger.add_handler({"channel": "alerts"}, _recorder([]))
        await trigger.start()
        return trigger._pubnub

    pubnub = asyncio.run(scenario())

    assert pubnub.subscribed == ["orders", "alerts"]
    assert len(pubnub.listeners) == 1
    assert pubnub.config.publish_key == "pub-c-123"
    assert pubnub.config.subscribe_key == "sub-c-456"
    assert pubnub.config.user_id == "worker-1"


def test_generated_uuid_when_not_configured():
    trigger = PubNubSubscriberTrigger(
        {"publishKey": "pub", "subscribeKey": "sub"}, pubnub_factory=FakePubNub
    )

    assert trigger.build_configuration().user_id.startswith("pn-")


def test_messages_reach_channel_handler_in_order():
    received = []

    async def scenario():
        trigger = _trigger()
        trigger.add_handler({"channel": "orders"}, _recorder(received))
        await trigger.start()
        pubnub = trigger._pubnub
        for i in range(3):
            trigger.listener.message(pubnub, pubnub_message({"n": i}, "orders", timetoken=100 + i))
        await trigger.drain()

    asyncio.run(scenario())

    assert [r.message for r in received] == [{"n": 0}, {"n": 1}, {"n": 2}]
    assert received[0].channel == "orders"
    assert received[0].publisher == "pub-1"
    assert received[0].time_token == "100"


def test_wildcard_subscription_routes_by_subscription():
    received = []

    async def scenario():
        trigger = _trigger()
        trigger.add_handler({"channel": "sensors.*"}, _recorder(received))
        trigger.dispatch(
            SubscriptionMessage(
                message="t=21", channel="sensors.kitchen", subscription="sensors.*", time_token="5"
            )
        )
        await trigger.drain()

    asyncio.run(scenario())

    assert received[0].channel == "sensors.kitchen"
    assert received[0].subscription == "sensors.*"


def test_message_without_handler_is_dropped():
    async def scenario():
        trigger = _trigger()
        trigger.add_handler({"channel": "orders"}, _recorder([]))
        return trigger.dispatch(SubscriptionMessage(channel="other", time_token="1"))

    assert asyncio.run(scenario()) is None


def test_failing_handler_does_not_stop_delivery():
    received = []

    async def flaky(record):
        if record.message == "boom":
            raise RuntimeError("handler exploded")
        received.append(record)

    async def scenario():
        trigger = _trigger()
        trigger.add_handler({"channel": "orders"}, flaky)
        trigger.dispatch(SubscriptionMessage(message="boom", channel="orders", time_token="1"))
        trigger.dispatch(SubscriptionMessage(message="ok", channel="orders", time_token="2"))
        await trigger.drain()

    asyncio.run(scenario())

    assert [r.message for r in received] == ["ok"]


def test_stop_unsubscribes_and_stops_client():
    async def scenario():
        trigger = _trigger()
        trigger.add_handler({"channel": "orders"}, _recorder([]))
        await trigger.start()
        pubnub = trigger._pubnub
        await trigger.stop()
        return pubnub

    pubnub = asyncio.run(scenario())

    assert pubnub.unsubscribed
    assert pubnub.stopped


def test_status_events_are_handled():
    trigger = _trigger()
    connected = SimpleNamespace(
        category=PNStatusCategory.PNConnectedCategory,
        affected_channels=["orders"],
        error_data=None,
        is_error=lambda: False,
    )
    failed = SimpleNamespace(
        category=PNStatusCategory.PNAccessDeniedCategory,
        affected_channels=[],
        error_data="403",
        is_error=lambda: True,
    )

    with capture_logs() as logs:
        trigger.listener.status(None, connected)
        trigger.listener.status(None, failed)

    assert logs[0]["log_level"] == "info"
    assert logs[0]["event"] == "PubNub subscription connected"
    assert logs[0]["channels"] == ["orders"]
    assert logs[1]["log_level"] == "error"
    assert logs[1]["event"].startswith("PubNub status error")
    assert logs[1]["error_data"] == "403"


def test_workflow_start_handler_starts_workflow():
    started = []

    class FakeClient:
        async def start_workflow(self, workflow, arg, id, task_queue):
            started.append((workflow, arg, id, task_queue))
            return SimpleNamespace(id=id)

    handler = WorkflowStartHandler(FakeClient(), "PubNubMessageWorkflow", "pubnub-messages")
    record = SubscriptionMessage(message="hi", channel="orders", time_token="42")

    workflow_id = asyncio.run(handler(record))

    workflow, arg, started_id, task_queue = started[0]
    assert workflow == "PubNubMessageWorkflow"
    assert arg is record
    assert task_queue == "pubnub-messages"
    assert started_id == workflow_id
    assert workflow_id.startswith("pubnub-orders-42-")
