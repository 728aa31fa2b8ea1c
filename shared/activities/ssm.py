"""
AWS SSM Parameter Store activities for Automata Parameter Workflows.

Stores and retrieves parameters with static credentials supplied by the
caller. Every invocation builds its own session and client; nothing is
cached between invocations and no call is retried.
"""

from collections.abc import Callable, Mapping
from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ValidationError
from temporalio import activity

from shared.errors import (
    ConfigurationError,
    ParameterStoreError,
    RemoteCallError,
    SessionError,
    to_application_error,
)
from shared.models.ssm import (
    AWSCredentials,
    ParameterActionRequest,
    ParameterActionResult,
    RetrieveParameterInput,
    SSMAction,
    StoreParameterInput,
)
from shared.services.results import shape_results

logger = structlog.get_logger(__name__)

NOT_OK = "NOK"


# ============================================================================
# Session
# ============================================================================


def create_ssm_client(
    credentials: AWSCredentials, session_factory: Callable[..., Any] | None = None
) -> Any:
    """
    Build an SSM client from static credentials.

    Args:
        credentials: Access key, secret key and region
        session_factory: Callable returning a boto3-compatible session

    Returns:
        A boto3 SSM client

    Raises:
        SessionError: If the session or client cannot be constructed
    """
    factory = session_factory or boto3.session.Session
    try:
        session = factory(
            aws_access_key_id=credentials.access_key_id,
            aws_secret_access_key=credentials.secret_access_key,
            region_name=credentials.region,
        )
        return session.client("ssm")
    except (BotoCoreError, ValueError) as e:
        raise SessionError(
            f"Failed to create SSM session for region '{credentials.region}': {e}"
        ) from e


# ============================================================================
# Adapter
# ============================================================================


class ParameterStoreAdapter:
    """Runs parameter store actions against one SSM client."""

    def __init__(self, client: Any, log: Any = None):
        self.client = client
        self.log = log or logger

    def store(self, params: StoreParameterInput) -> dict[str, int]:
        """Put a single parameter and return its new version keyed by name."""
        self.log.info(
            f"Storing parameter '{params.name}'",
            parameter_type=params.type,
            overwrite=params.overwrite,
        )
        try:
            response = self.client.put_parameter(
                Name=params.name,
                Value=params.value,
                Type=params.type,
                Overwrite=params.overwrite,
            )
        except (ClientError, BotoCoreError) as e:
            self.log.error(f"Error while storing parameter in SSM [{e}]", parameter=params.name)
            raise RemoteCallError("put_parameter", params.name, e) from e

        return {params.name: response["Version"]}

    def retrieve(self, params: RetrieveParameterInput) -> dict[str, str]:
        """Get a single parameter value keyed by name."""
        return {params.name: self._get_parameter(params.name, params.decrypt)}

    def retrieve_list(self, params: RetrieveParameterInput) -> dict[str, str]:
        """
        Get several parameters, one call per name in the order given.

        The first failing lookup aborts the whole list; values fetched before
        it are discarded.
        """
        results: dict[str, str] = {}
        for name in params.names():
            results[name] = self._get_parameter(name, params.decrypt)
        return results

    def _get_parameter(self, name: str, decrypt: bool) -> str:
        self.log.info(f"Retrieving parameter '{name}'", decrypt=decrypt)
        try:
            response = self.client.get_parameter(Name=name, WithDecryption=decrypt)
        except (ClientError, BotoCoreError) as e:
            self.log.error(f"Error while retrieving parameter from SSM [{e}]", parameter=name)
            raise RemoteCallError("get_parameter", name, e) from e

        return response["Parameter"]["Value"]


# ============================================================================
# Invocation
# ============================================================================


def _validate(model: type[BaseModel], data: Any, context: str) -> Any:
    """Validate input fields once, collecting every bad field into one error."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            f"Invalid {context} input, missing or mistyped fields: {', '.join(fields)}",
            fields=fields,
        ) from e


def execute_parameter_action(
    fields: Mapping[str, Any] | ParameterActionRequest,
    client_factory: Callable[[AWSCredentials], Any] = create_ssm_client,
    log: Any = None,
) -> ParameterActionResult:
    """
    Run one parameter store action.

    Args:
        fields: Engine input fields (action, credentials, action-specific fields)
        client_factory: Builds the SSM client from the credentials
        log: Logger scoped to this invocation

    Returns:
        ParameterActionResult with the results envelope, or "NOK" for an
        unrecognized action

    Raises:
        ConfigurationError: Input fields missing or of the wrong type
        SessionError: The SSM client could not be built
        RemoteCallError: A parameter store call failed
        ShapingError: The results could not be shaped
    """
    if isinstance(fields, ParameterActionRequest):
        request = fields
    else:
        request = _validate(ParameterActionRequest, dict(fields), "request")

    log = (log or logger).bind(action=request.action)

    # The session is built before the action is looked at
    adapter = ParameterStoreAdapter(client_factory(request.credentials), log)

    if request.action == SSMAction.STORE.value:
        params = _validate(StoreParameterInput, request.action_fields(), request.action)
        results = adapter.store(params)
    elif request.action == SSMAction.RETRIEVE.value:
        params = _validate(RetrieveParameterInput, request.action_fields(), request.action)
        results = adapter.retrieve(params)
    elif request.action == SSMAction.RETRIEVE_LIST.value:
        params = _validate(RetrieveParameterInput, request.action_fields(), request.action)
        results = adapter.retrieve_list(params)
    else:
        log.warning(f"Unknown action '{request.action}', returning {NOT_OK}")
        return ParameterActionResult(result=NOT_OK)

    log.info(f"Action '{request.action}' completed for {len(results)} parameter(s)")
    return ParameterActionResult(result=shape_results(results))


@activity.defn(name="amazon_ssm_action")
def amazon_ssm_action(fields: dict[str, Any]) -> ParameterActionResult:
    """
    Perform a store, retrieve or retrieveList action on AWS SSM Parameter Store.

    Args:
        fields: Engine input fields keyed as awsAccessKeyID, parameterName, ...

    Returns:
        ParameterActionResult: Results envelope, or "NOK" for an unknown action
    """
    info = activity.info()
    log = logger.bind(
        activity_id=info.activity_id,
        workflow_id=info.workflow_id,
    )

    try:
        return execute_parameter_action(fields, client_factory=create_ssm_client, log=log)
    except ParameterStoreError as e:
        log.error(f"Parameter store action failed: {e}", error_type=type(e).__name__)
        raise to_application_error(e) from e
