"""
Parameter Store Worker

This worker runs parameter store workflows against AWS SSM Parameter Store.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import structlog
from temporalio.client import Client
from temporalio.contrib.pydantic import pydantic_data_converter
from temporalio.worker import Worker

from shared.activities.ssm import amazon_ssm_action
from shared.config import config
from shared.log_config import configure_logging
from workflows.parameter_store.parameter_store_workflow import ParameterStoreWorkflow

logger = structlog.get_logger(__name__)


async def run_parameter_store_worker(task_queue: str | None = None):
    """Run the parameter store worker."""

    # Connect to Temporal server using configuration
    temporal_config = config.get_temporal_client_config()
    client = await Client.connect(
        temporal_config["host"],
        namespace=temporal_config["namespace"],
        data_converter=pydantic_data_converter,
    )

    queue = task_queue or config.TEMPORAL_TASK_QUEUE

    # boto3 calls block, so the activity runs on a thread pool
    with ThreadPoolExecutor(max_workers=config.ACTIVITY_MAX_WORKERS) as executor:
        worker = Worker(
            client,
            task_queue=queue,
            workflows=[
                ParameterStoreWorkflow,
            ],
            activities=[
                amazon_ssm_action,
            ],
            activity_executor=executor,
        )

        logger.info(
            "Starting parameter store worker",
            temporal_host=config.TEMPORAL_HOST,
            namespace=config.TEMPORAL_NAMESPACE,
            task_queue=queue,
            workflows=["ParameterStoreWorkflow"],
            activities=["amazon_ssm_action"],
        )

        await worker.run()


async def main():
    """Main entry point when run directly."""
    configure_logging(config.LOG_LEVEL, config.LOG_FORMAT)
    await run_parameter_store_worker()


if __name__ == "__main__":
    asyncio.run(main())
