"""
PubNub Trigger Worker

Runs the PubNub subscriber trigger together with a worker for the workflows
it starts. Every configured channel gets a handler that starts
PUBNUB_HANDLER_WORKFLOW on the PubNub task queue.
"""

import asyncio
import sys

import structlog
from temporalio.client import Client
from temporalio.contrib.pydantic import pydantic_data_converter
from temporalio.worker import Worker

from shared.config import config
from shared.log_config import configure_logging
from shared.triggers.handlers import WorkflowStartHandler
from shared.triggers.pubnub_subscriber import PubNubSubscriberTrigger
from workflows.pubnub_messages.pubnub_message_workflow import PubNubMessageWorkflow

logger = structlog.get_logger(__name__)


async def run_pubnub_trigger_worker(task_queue: str | None = None):
    """Run the PubNub trigger and the message workflow worker."""
    channels = config.get_pubnub_channels()
    if not channels:
        raise ValueError("PUBNUB_CHANNELS environment variable is required")

    temporal_config = config.get_temporal_client_config()
    client = await Client.connect(
        temporal_config["host"],
        namespace=temporal_config["namespace"],
        data_converter=pydantic_data_converter,
    )

    queue = task_queue or config.TEMPORAL_TASK_QUEUE_PUBNUB

    trigger = PubNubSubscriberTrigger(config.get_pubnub_settings())
    for channel in channels:
        trigger.add_handler(
            {"channel": channel},
            WorkflowStartHandler(client, config.PUBNUB_HANDLER_WORKFLOW, queue),
        )

    worker = Worker(
        client,
        task_queue=queue,
        workflows=[PubNubMessageWorkflow],
    )

    logger.info(
        "Starting PubNub trigger worker",
        temporal_host=config.TEMPORAL_HOST,
        task_queue=queue,
        channels=channels,
        handler_workflow=config.PUBNUB_HANDLER_WORKFLOW,
    )

    await trigger.start()
    try:
        await worker.run()
    finally:
        await trigger.stop()


async def main():
    """Main entry point when run directly."""
    configure_logging(config.LOG_LEVEL, config.LOG_FORMAT)
    await run_pubnub_trigger_worker()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Worker stopped by user")
    except Exception as e:
        logger.error(f"Worker failed: {e}")
        sys.exit(1)
