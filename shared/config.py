"""
Configuration management for Automata Parameter Workflows.

This module provides centralized access to environment variables and configuration
settings used by the workers, the parameter store activity and the PubNub trigger.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from the project's .env file
project_root = Path(__file__).parent.parent
env_file = project_root / ".env"

if env_file.exists():
    load_dotenv(env_file)


class Config:
    """Centralized configuration class for environment variables."""

    # Temporal Configuration
    TEMPORAL_HOST: str = os.getenv("TEMPORAL_HOST", "localhost:7233")
    TEMPORAL_NAMESPACE: str = os.getenv("TEMPORAL_NAMESPACE", "default")
    TEMPORAL_TASK_QUEUE: str = os.getenv("TEMPORAL_TASK_QUEUE", "parameter-store")
    TEMPORAL_TASK_QUEUE_PUBNUB: str = os.getenv(
        "TEMPORAL_TASK_QUEUE_PUBNUB", "pubnub-messages"
    )

    # Parameter store activity
    SSM_ACTIVITY_TIMEOUT: int = int(os.getenv("SSM_ACTIVITY_TIMEOUT", "60"))
    ACTIVITY_MAX_WORKERS: int = int(os.getenv("ACTIVITY_MAX_WORKERS", "10"))

    # PubNub Configuration
    PUBNUB_PUBLISH_KEY: str | None = os.getenv("PUBNUB_PUBLISH_KEY")
    PUBNUB_SUBSCRIBE_KEY: str | None = os.getenv("PUBNUB_SUBSCRIBE_KEY")
    PUBNUB_UUID: str | None = os.getenv("PUBNUB_UUID")
    PUBNUB_CHANNELS: str = os.getenv("PUBNUB_CHANNELS", "")
    PUBNUB_HANDLER_WORKFLOW: str = os.getenv(
        "PUBNUB_HANDLER_WORKFLOW", "PubNubMessageWorkflow"
    )

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")

    @classmethod
    def validate_pubnub_config(cls) -> bool:
        """Validate that required PubNub configuration is present."""
        if not cls.PUBNUB_PUBLISH_KEY:
            raise ValueError("PUBNUB_PUBLISH_KEY environment variable is required")
        if not cls.PUBNUB_SUBSCRIBE_KEY:
            raise ValueError("PUBNUB_SUBSCRIBE_KEY environment variable is required")
        return True

    @classmethod
    def get_temporal_client_config(cls) -> dict:
        """Get Temporal client configuration."""
        return {
            "host": cls.TEMPORAL_HOST,
            "namespace": cls.TEMPORAL_NAMESPACE,
        }

    @classmethod
    def get_pubnub_settings(cls) -> dict:
        """Get PubNub trigger settings keyed the way the trigger metadata names them."""
        cls.validate_pubnub_config()
        settings = {
            "publishKey": cls.PUBNUB_PUBLISH_KEY,
            "subscribeKey": cls.PUBNUB_SUBSCRIBE_KEY,
        }
        if cls.PUBNUB_UUID:
            settings["uuid"] = cls.PUBNUB_UUID
        return settings

    @classmethod
    def get_pubnub_channels(cls) -> list[str]:
        """Get the list of channels the trigger should register handlers for."""
        return [c.strip() for c in cls.PUBNUB_CHANNELS.split(",") if c.strip()]


# Global configuration instance
config = Config()
