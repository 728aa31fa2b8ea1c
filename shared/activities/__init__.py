"""
Shared Temporal activities for Automata Parameter Workflows

This package contains the activities registered by the workers.
"""

__version__ = "0.1.0"

# Parameter Store Activities
from .ssm import (
    ParameterStoreAdapter,
    amazon_ssm_action,
    create_ssm_client,
    execute_parameter_action,
)

__all__ = [
    # Parameter Store
    "ParameterStoreAdapter",
    "amazon_ssm_action",
    "create_ssm_client",
    "execute_parameter_action",
]
