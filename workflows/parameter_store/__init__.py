"""
Parameter Store Workflows

This package contains workflows that read and write AWS SSM parameters.
"""

__version__ = "0.1.0"

from .parameter_store_workflow import ParameterStoreWorkflow

__all__ = [
    "ParameterStoreWorkflow",
]
