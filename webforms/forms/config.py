"""
Forms configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys
from pydantic import Field
from webforms.common.core.config import BaseAppConfig


class FormsConfig(BaseAppConfig):
    """
    Configuration management for request parsing.
    """

    # Multipart decoding limits
    MULTIPART_SPOOL_MAX_SIZE: int = Field(
        default=2048,
        ge=0,
        description="Bytes of an uploaded file kept in memory before spilling to a temp file",
    )
    MULTIPART_MAX_FILES: int = Field(default=1000, ge=1, description="Max file parts per request")
    MULTIPART_MAX_FIELDS: int = Field(
        default=1000, ge=1, description="Max non-file parts per request"
    )

    # Logging
    LOG_CONFIG_PATH: str = Field(
        default="config/forms_log.yaml", description="Logging YAML config path"
    )

    # model_config is inherited


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = FormsConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
