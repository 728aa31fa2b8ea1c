#!/usr/bin/env python3
"""
Run workflow workers.

This script starts the parameter store worker, the PubNub trigger worker, or both.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from shared.config import config
from shared.log_config import configure_logging
from workers.parameter_store_worker import run_parameter_store_worker
from workers.pubnub_trigger_worker import run_pubnub_trigger_worker


async def main():
    """Main entry point for running workers."""
    parser = argparse.ArgumentParser(description="Run workflow workers")
    parser.add_argument(
        "--workflow",
        choices=["parameter_store", "pubnub", "all"],
        default="all",
        help="Specific worker to run (default: all)",
    )
    parser.add_argument("--task-queue", default=None, help="Override task queue name")

    args = parser.parse_args()

    configure_logging(config.LOG_LEVEL, config.LOG_FORMAT)

    print("🚀 Starting Automata Parameter Workflows Workers")
    print("=" * 50)

    runners = []
    if args.workflow in ("parameter_store", "all"):
        print("🔐 Starting Parameter Store Worker...")
        runners.append(run_parameter_store_worker(task_queue=args.task_queue))
    if args.workflow in ("pubnub", "all"):
        print("📡 Starting PubNub Trigger Worker...")
        runners.append(run_pubnub_trigger_worker(task_queue=args.task_queue))

    try:
        await asyncio.gather(*runners)
    except KeyboardInterrupt:
        print("\n⏹️  Workers stopped by user")
    except Exception as e:
        print(f"❌ Worker failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
