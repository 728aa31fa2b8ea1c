"""
Shared Services

This package contains service modules used by the activities and triggers.
"""

from shared.services.results import RESULTS_KEY, dumps_envelope, shape_results

__all__ = [
    "RESULTS_KEY",
    "dumps_envelope",
    "shape_results",
]
