"""
PubNub Message Workflow

Default handler workflow for the PubNub subscriber trigger: records the
received message in the workflow history and returns it.
"""

from temporalio import workflow

with workflow.unsafe.imports_passed_through():
    from shared.models.pubsub import SubscriptionMessage


@workflow.defn
class PubNubMessageWorkflow:
    """Receive one message delivered by the PubNub subscriber trigger."""

    @workflow.run
    async def run(self, record: SubscriptionMessage) -> SubscriptionMessage:
        workflow.logger.info(
            f"Received message on channel '{record.channel}' "
            f"from {record.publisher or 'unknown publisher'} at {record.time_token}"
        )
        return record
