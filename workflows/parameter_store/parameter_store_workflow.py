"""
Parameter Store Workflow

This workflow runs a single store, retrieve or retrieveList action against
AWS SSM Parameter Store. Failures are reported as-is; the activity is never
retried.
"""

from datetime import timedelta
from typing import Any

from temporalio import workflow
from temporalio.common import RetryPolicy

# Import only the models, not the activities (to avoid sandbox issues)
with workflow.unsafe.imports_passed_through():
    from shared.models.ssm import ParameterActionResult

DEFAULT_ACTIVITY_TIMEOUT_SECONDS = 60


@workflow.defn
class ParameterStoreWorkflow:
    """Run one parameter store action."""

    @workflow.run
    async def run(
        self, fields: dict[str, Any], timeout_seconds: int = DEFAULT_ACTIVITY_TIMEOUT_SECONDS
    ) -> ParameterActionResult:
        """
        Execute the amazon_ssm_action activity once.

        Args:
            fields: Engine input fields (action, credentials, parameter fields)
            timeout_seconds: Start-to-close timeout of the activity

        Returns:
            ParameterActionResult: Results envelope, or "NOK" for an unknown action
        """
        workflow.logger.info(f"Running parameter store action: {fields.get('action')}")

        result = await workflow.execute_activity(
            "amazon_ssm_action",
            fields,
            start_to_close_timeout=timedelta(seconds=timeout_seconds),
            retry_policy=RetryPolicy(maximum_attempts=1),
            result_type=ParameterActionResult,
        )

        if not result.recognized:
            workflow.logger.warning(f"Unrecognized parameter store action: {fields.get('action')}")
        else:
            workflow.logger.info(f"Parameter store action finished: {fields.get('action')}")
        return result
