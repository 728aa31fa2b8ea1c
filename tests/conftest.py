"""
Shared fakes for the parameter store and PubNub tests.
"""

from types import SimpleNamespace

import pytest
from botocore.exceptions import ClientError


class FakeSSMClient:
    """In-memory stand-in for a boto3 SSM client that records every call."""

    def __init__(self, parameters=None, failing=(), first_version=1):
        self.parameters = dict(parameters or {})
        self.failing = set(failing)
        self.versions = {}
        self.first_version = first_version
        self.calls = []

    def get_parameter(self, Name, WithDecryption=False):
        self.calls.append(("get_parameter", Name, WithDecryption))
        if Name in self.failing or Name not in self.parameters:
            raise ClientError(
                {"Error": {"Code": "ParameterNotFound", "Message": f"{Name} not found"}},
                "GetParameter",
            )
        return {
            "Parameter": {
                "Name": Name,
                "Type": "String",
                "Value": self.parameters[Name],
                "Version": self.versions.get(Name, 1),
            }
        }

    def put_parameter(self, Name, Value, Type, Overwrite):
        self.calls.append(("put_parameter", Name, Value, Type, Overwrite))
        if Name in self.failing:
            raise ClientError(
                {"Error": {"Code": "ParameterAlreadyExists", "Message": "exists"}},
                "PutParameter",
            )
        version = self.versions.get(Name, self.first_version - 1) + 1
        self.versions[Name] = version
        self.parameters[Name] = Value
        return {"Version": version, "Tier": "Standard"}


class FakePubNub:
    """Stand-in for PubNubAsyncio that records listeners and subscriptions."""

    def __init__(self, config):
        self.config = config
        self.listeners = []
        self.subscribed = []
        self.unsubscribed = False
        self.stopped = False

    def add_listener(self, listener):
        self.listeners.append(listener)

    def subscribe(self):
        pubnub = self

        class _Builder:
            def channels(self, channels):
                self._channels = list(channels)
                return self

            def execute(self):
                pubnub.subscribed.extend(self._channels)

        return _Builder()

    def unsubscribe_all(self):
        self.unsubscribed = True

    async def stop(self):
        self.stopped = True


def pubnub_message(message, channel, timetoken=17000000000000000, publisher="pub-1", subscription=None):
    """Build an object shaped like a PubNub PNMessageResult."""
    return SimpleNamespace(
        message=message,
        channel=channel,
        subscription=subscription,
        publisher=publisher,
        timetoken=timetoken,
    )


@pytest.fixture
def credentials_fields():
    return {
        "awsAccessKeyID": "AKIAEXAMPLE",
        "awsSecretAccessKey": "secret",
        "awsRegion": "us-east-1",
    }


@pytest.fixture
def ssm_client():
    return FakeSSMClient(
        parameters={
            "a": "alpha",
            "b": "bravo",
            "c": "charlie",
            "/app/db/password": "hunter2",
        }
    )
