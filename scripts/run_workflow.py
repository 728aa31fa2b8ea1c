#!/usr/bin/env python3
"""
Run a parameter store action through Temporal.

This script executes ParameterStoreWorkflow with input fields given as JSON.
"""

import argparse
import asyncio
import json
import sys
import uuid
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from temporalio.client import Client, WorkflowFailureError
from temporalio.contrib.pydantic import pydantic_data_converter

from shared.config import config
from shared.services.results import dumps_envelope
from workflows.parameter_store.parameter_store_workflow import ParameterStoreWorkflow


async def run_parameter_store(input_data: dict):
    """Run the parameter store workflow."""
    # Connect to Temporal server
    temporal_config = config.get_temporal_client_config()
    client = await Client.connect(
        temporal_config["host"],
        namespace=temporal_config["namespace"],
        data_converter=pydantic_data_converter,
    )

    print("🔐 Running Parameter Store Workflow")
    print(f"Action: {input_data.get('action')}")
    print(f"Parameter: {input_data.get('parameterName')}")
    print(f"Task Queue: {config.TEMPORAL_TASK_QUEUE}")
    print("-" * 50)

    result = await client.execute_workflow(
        ParameterStoreWorkflow.run,
        args=[input_data, config.SSM_ACTIVITY_TIMEOUT],
        id=f"parameter-store-{uuid.uuid4()}",
        task_queue=config.TEMPORAL_TASK_QUEUE,
    )

    if result.recognized:
        print("✅ Workflow completed successfully!")
        print(f"Result: {dumps_envelope(result.result)}")
    else:
        print(f"⚠️  Action not recognized, result: {result.result}")

    return result


async def main():
    """Main entry point for running the workflow."""
    parser = argparse.ArgumentParser(description="Run a parameter store action")
    parser.add_argument("--input", help="Input fields as JSON string")
    parser.add_argument("--input-file", help="Input fields from JSON file")

    args = parser.parse_args()

    # Validate input arguments
    if not args.input and not args.input_file:
        parser.error("Either --input or --input-file must be provided")

    # Parse input data
    if args.input_file:
        with open(args.input_file) as f:
            input_data = json.load(f)
    else:
        input_data = json.loads(args.input)

    print("🚀 Starting Workflow Execution")
    print("=" * 50)

    try:
        await run_parameter_store(input_data)
    except WorkflowFailureError as e:
        print(f"❌ Workflow failed: {e.cause}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Workflow failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
