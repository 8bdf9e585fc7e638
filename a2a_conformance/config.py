"""
Validation configuration for the A2A conformance engine

Bounds and permitted values used by the field validators. The configuration
is an immutable value passed explicitly to validators, so every verdict
depends only on its inputs.
"""

import os
from typing import Tuple

from pydantic import BaseModel, Field

PROTOCOL_VERSION = "0.3.0"


class ValidationConfig(BaseModel):
    """Limits applied by the field validators"""
    model_config = {"frozen": True}

    max_identifier_length: int = Field(default=255, ge=1)
    max_agent_name_length: int = Field(default=100, ge=1)
    max_version_length: int = Field(default=50, ge=1)
    max_skill_id_length: int = Field(default=100, ge=1)
    max_description_length: int = Field(default=500, ge=1)
    max_extension_description_length: int = Field(default=1000, ge=1)
    allowed_url_schemes: Tuple[str, ...] = ("http", "https")
    protocol_version: str = PROTOCOL_VERSION


DEFAULT_VALIDATION_CONFIG = ValidationConfig()


def create_validation_config_from_env() -> ValidationConfig:
    """Create validation configuration from environment variables"""
    defaults = DEFAULT_VALIDATION_CONFIG
    schemes_str = os.getenv("A2A_ALLOWED_URL_SCHEMES")
    allowed_schemes = (
        tuple(s.strip().lower() for s in schemes_str.split(",") if s.strip())
        if schemes_str else defaults.allowed_url_schemes
    )

    return ValidationConfig(
        max_identifier_length=int(os.getenv("A2A_MAX_IDENTIFIER_LENGTH", str(defaults.max_identifier_length))),
        max_agent_name_length=int(os.getenv("A2A_MAX_AGENT_NAME_LENGTH", str(defaults.max_agent_name_length))),
        max_version_length=int(os.getenv("A2A_MAX_VERSION_LENGTH", str(defaults.max_version_length))),
        max_description_length=int(os.getenv("A2A_MAX_DESCRIPTION_LENGTH", str(defaults.max_description_length))),
        allowed_url_schemes=allowed_schemes,
        protocol_version=os.getenv("A2A_PROTOCOL_VERSION", defaults.protocol_version),
    )
