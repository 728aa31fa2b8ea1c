"""
AWS SSM Parameter Store data models for Automata Parameter Workflows
"""

from enum import Enum
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_serializer,
    field_validator,
)

from shared.services.results import decimals_to_numbers, numbers_to_decimals


class SSMAction(str, Enum):
    """Actions understood by the parameter store activity."""

    STORE = "store"
    RETRIEVE = "retrieve"
    RETRIEVE_LIST = "retrieveList"


ParameterType = Literal["String", "StringList", "SecureString"]


class AWSCredentials(BaseModel):
    """Static AWS credentials used to build a session for one invocation."""

    access_key_id: StrictStr = Field(
        ..., alias="awsAccessKeyID", description="AWS access key ID"
    )
    secret_access_key: StrictStr = Field(
        ..., alias="awsSecretAccessKey", description="AWS secret access key", repr=False
    )
    region: StrictStr = Field(..., alias="awsRegion", description="AWS region")

    model_config = ConfigDict(populate_by_name=True)


class ParameterActionRequest(BaseModel):
    """Input fields of the parameter store activity, keyed as the engine sends them.

    Action and credentials are always required. The remaining fields are only
    required by the actions that use them and are checked when the action is
    dispatched.
    """

    action: StrictStr = Field(..., description="store, retrieve or retrieveList")
    aws_access_key_id: StrictStr = Field(..., alias="awsAccessKeyID")
    aws_secret_access_key: StrictStr = Field(
        ..., alias="awsSecretAccessKey", repr=False
    )
    aws_region: StrictStr = Field(..., alias="awsRegion")
    parameter_name: StrictStr | None = Field(
        default=None,
        alias="parameterName",
        description="Parameter name, or comma-separated names for retrieveList",
    )
    decrypt_parameter: StrictBool | None = Field(
        default=None, alias="decryptParameter", description="Decrypt SecureString values"
    )
    parameter_value: StrictStr | None = Field(
        default=None, alias="parameterValue", description="Value to store"
    )
    overwrite_existing_parameter: StrictBool | None = Field(
        default=None,
        alias="overwriteExistingParameter",
        description="Overwrite the parameter if it already exists",
    )
    parameter_type: StrictStr | None = Field(
        default=None, alias="parameterType", description="SSM parameter type"
    )

    model_config = ConfigDict(populate_by_name=True)

    @property
    def credentials(self) -> AWSCredentials:
        return AWSCredentials(
            access_key_id=self.aws_access_key_id,
            secret_access_key=self.aws_secret_access_key,
            region=self.aws_region,
        )

    def action_fields(self) -> dict[str, Any]:
        """Return the action-specific fields that were supplied, keyed by alias."""
        return self.model_dump(
            by_alias=True,
            exclude_none=True,
            include={
                "parameter_name",
                "decrypt_parameter",
                "parameter_value",
                "overwrite_existing_parameter",
                "parameter_type",
            },
        )


class StoreParameterInput(BaseModel):
    """Fields required by the store action."""

    name: StrictStr = Field(..., alias="parameterName", description="Parameter name")
    value: StrictStr = Field(..., alias="parameterValue", description="Parameter value")
    type: ParameterType = Field(..., alias="parameterType", description="Parameter type")
    overwrite: StrictBool = Field(
        ..., alias="overwriteExistingParameter", description="Overwrite existing value"
    )

    model_config = ConfigDict(populate_by_name=True)


class RetrieveParameterInput(BaseModel):
    """Fields required by the retrieve and retrieveList actions."""

    name: StrictStr = Field(
        ..., alias="parameterName", description="Parameter name or comma-separated names"
    )
    decrypt: StrictBool = Field(
        ..., alias="decryptParameter", description="Decrypt SecureString values"
    )

    model_config = ConfigDict(populate_by_name=True)

    def names(self) -> list[str]:
        """Split the name field on commas, keeping order and whitespace."""
        return self.name.split(",")


class ParameterActionResult(BaseModel):
    """Output of the parameter store activity.

    ``result`` is the ``{"results": {...}}`` envelope on success, or the
    literal ``"NOK"`` when the action was not recognized.
    """

    result: dict[str, Any] | Literal["NOK"] = Field(
        ..., description="Results envelope or NOK"
    )

    @field_validator("result", mode="before")
    @classmethod
    def _decode_numbers(cls, value: Any) -> Any:
        return numbers_to_decimals(value)

    # Decimal would otherwise be written as a JSON string
    @field_serializer("result", when_used="json")
    def _encode_numbers(self, value: Any) -> Any:
        return decimals_to_numbers(value)

    @property
    def recognized(self) -> bool:
        return self.result != "NOK"
