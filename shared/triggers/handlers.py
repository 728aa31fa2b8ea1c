"""
Trigger handlers that hand received messages to Temporal.
"""

import uuid

import structlog
from temporalio.client import Client

from shared.models.pubsub import SubscriptionMessage

logger = structlog.get_logger(__name__)


class WorkflowStartHandler:
    """Start one workflow execution per received message."""

    def __init__(
        self,
        client: Client,
        workflow: str,
        task_queue: str,
        id_prefix: str = "pubnub",
    ):
        self.client = client
        self.workflow = workflow
        self.task_queue = task_queue
        self.id_prefix = id_prefix

    def workflow_id(self, record: SubscriptionMessage) -> str:
        return f"{self.id_prefix}-{record.channel}-{record.time_token}-{uuid.uuid4().hex[:8]}"

    async def __call__(self, record: SubscriptionMessage) -> str:
        workflow_id = self.workflow_id(record)
        handle = await self.client.start_workflow(
            self.workflow,
            record,
            id=workflow_id,
            task_queue=self.task_queue,
        )
        logger.info(
            f"Started {self.workflow} for message on '{record.channel}'",
            workflow_id=handle.id,
        )
        return handle.id
