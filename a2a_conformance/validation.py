"""
Pure field validators for A2A protocol values

Each validator takes one raw value and returns Success(value) or a Failure
carrying InvalidField. Validators are total: any input, including None or a
non-string, yields a verdict rather than an exception.
"""

import re
from enum import Enum
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlparse

from .config import DEFAULT_VALIDATION_CONFIG, ValidationConfig
from .errors import InvalidField, Result, Success, invalid_field

ValidationResult = Result[Any, InvalidField]

# RFC 9110 token characters
_TOKEN = r"[!#$%&'*+.^_`|~0-9A-Za-z-]+"
_QUOTED_STRING = r'"(?:[^"\\]|\\.)*"'
_MEDIA_TYPE_PATTERN = re.compile(
    rf"^{_TOKEN}/{_TOKEN}(?:[ \t]*;[ \t]*{_TOKEN}=(?:{_TOKEN}|{_QUOTED_STRING}))*$"
)
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
_SKILL_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
_VERSION_PATTERN = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)
# RFC 3986 scheme
_URI_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_WHITESPACE = re.compile(r"\s")


class FieldKind(str, Enum):
    """Semantic kinds of primitive protocol fields"""
    URL = "url"
    URI = "uri"
    MEDIA_TYPE = "media-type"
    IDENTIFIER = "identifier"
    AGENT_NAME = "agent-name"
    VERSION = "version"
    SKILL_ID = "skill-id"


def _config(config: Optional[ValidationConfig]) -> ValidationConfig:
    return config or DEFAULT_VALIDATION_CONFIG


def validate_non_empty_string(value: Any, field: str) -> ValidationResult:
    """Pure function to validate a required, non-blank string"""
    if not isinstance(value, str):
        return invalid_field(field, value, "must be a string")
    if not value.strip():
        return invalid_field(field, value, "cannot be empty")
    return Success(value)


def validate_url(
    value: Any,
    field: str = "url",
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Pure function to validate an absolute URL with a permitted scheme and a host"""
    if not isinstance(value, str):
        return invalid_field(field, value, "must be a string")
    if not value:
        return invalid_field(field, value, "URL cannot be empty")
    if _WHITESPACE.search(value):
        return invalid_field(field, value, "URL cannot contain whitespace")

    try:
        parsed = urlparse(value)
        hostname = parsed.hostname
        parsed.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError as error:
        return invalid_field(field, value, f"URL could not be parsed: {error}")

    allowed = _config(config).allowed_url_schemes
    if not parsed.scheme:
        return invalid_field(field, value, "URL must be absolute with a scheme")
    if parsed.scheme.lower() not in allowed:
        return invalid_field(field, value, f"URL scheme must be one of {', '.join(allowed)}")
    if not parsed.netloc or not hostname:
        return invalid_field(field, value, "URL must contain a host")

    return Success(value)


def validate_uri(
    value: Any,
    field: str = "uri",
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """
    Pure function to validate an absolute URI.

    HTTP(S) URIs must also pass URL validation; other schemes (urn:, tag:, ...)
    need only a well-formed scheme and a non-empty remainder.
    """
    if not isinstance(value, str):
        return invalid_field(field, value, "must be a string")
    if not value:
        return invalid_field(field, value, "URI cannot be empty")
    if _WHITESPACE.search(value):
        return invalid_field(field, value, "URI cannot contain whitespace")

    match = _URI_SCHEME_PATTERN.match(value)
    if not match:
        return invalid_field(field, value, "URI must start with a scheme")

    scheme = match.group(0)[:-1].lower()
    if scheme in ("http", "https"):
        return validate_url(value, field, config)
    if len(value) == len(match.group(0)):
        return invalid_field(field, value, "URI must have content after the scheme")

    return Success(value)


def validate_media_type(value: Any, field: str = "mediaType") -> ValidationResult:
    """Pure function to validate type/subtype[;parameter]* syntax"""
    if not isinstance(value, str):
        return invalid_field(field, value, "must be a string")
    if not value:
        return invalid_field(field, value, "media type cannot be empty")
    if not _MEDIA_TYPE_PATTERN.fullmatch(value):
        return invalid_field(field, value, "media type must match 'type/subtype[;parameter=value]*'")
    return Success(value)


def validate_identifier(
    value: Any,
    field: str = "id",
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Pure function to validate a task, message, artifact or context identifier"""
    if not isinstance(value, str):
        return invalid_field(field, value, "must be a string")
    if not value:
        return invalid_field(field, value, "identifier cannot be empty")

    max_length = _config(config).max_identifier_length
    if len(value) > max_length:
        return invalid_field(field, value, f"identifier is too long (max {max_length} characters)")
    if not _IDENTIFIER_PATTERN.fullmatch(value):
        return invalid_field(
            field, value,
            "identifier can only contain ASCII letters, digits, hyphens and underscores"
        )
    return Success(value)


def validate_task_id(value: Any, config: Optional[ValidationConfig] = None) -> ValidationResult:
    return validate_identifier(value, "taskId", config)


def validate_message_id(value: Any, config: Optional[ValidationConfig] = None) -> ValidationResult:
    return validate_identifier(value, "messageId", config)


def validate_artifact_id(value: Any, config: Optional[ValidationConfig] = None) -> ValidationResult:
    return validate_identifier(value, "artifactId", config)


def validate_context_id(value: Any, config: Optional[ValidationConfig] = None) -> ValidationResult:
    return validate_identifier(value, "contextId", config)


def validate_agent_name(
    value: Any,
    field: str = "name",
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Pure function to validate an agent name"""
    if not isinstance(value, str):
        return invalid_field(field, value, "must be a string")
    if not value:
        return invalid_field(field, value, "agent name cannot be empty")

    max_length = _config(config).max_agent_name_length
    if len(value) > max_length:
        return invalid_field(field, value, f"agent name is too long (max {max_length} characters)")
    if value.strip() != value:
        return invalid_field(field, value, "agent name cannot start or end with whitespace")
    return Success(value)


def validate_version(
    value: Any,
    field: str = "version",
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Pure function to validate a major.minor.patch[-prerelease][+build] version"""
    if not isinstance(value, str):
        return invalid_field(field, value, "must be a string")
    if not value:
        return invalid_field(field, value, "version cannot be empty")

    max_length = _config(config).max_version_length
    if len(value) > max_length:
        return invalid_field(field, value, f"version is too long (max {max_length} characters)")
    if not _VERSION_PATTERN.fullmatch(value):
        return invalid_field(field, value, "version must look like major.minor.patch[-prerelease]")
    return Success(value)


def validate_skill_id(
    value: Any,
    field: str = "id",
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Pure function to validate a skill identifier"""
    if not isinstance(value, str):
        return invalid_field(field, value, "must be a string")
    if not value:
        return invalid_field(field, value, "skill id cannot be empty")

    max_length = _config(config).max_skill_id_length
    if len(value) > max_length:
        return invalid_field(field, value, f"skill id is too long (max {max_length} characters)")
    if not _SKILL_ID_PATTERN.fullmatch(value):
        return invalid_field(
            field, value,
            "skill id can only contain ASCII letters, digits, hyphens, underscores and dots"
        )
    return Success(value)


def validate_description(
    value: Any,
    field: str = "description",
    max_length: Optional[int] = None,
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Pure function to validate an optional free-text description"""
    if value is None:
        return Success(value)
    if not isinstance(value, str):
        return invalid_field(field, value, "must be a string")

    limit = max_length or _config(config).max_description_length
    if len(value) > limit:
        return invalid_field(field, value, f"description is too long (max {limit} characters)")
    return Success(value)


_FIELD_VALIDATORS: Dict[FieldKind, Callable[..., ValidationResult]] = {
    FieldKind.URL: lambda value, field, config: validate_url(value, field, config),
    FieldKind.URI: lambda value, field, config: validate_uri(value, field, config),
    FieldKind.MEDIA_TYPE: lambda value, field, config: validate_media_type(value, field),
    FieldKind.IDENTIFIER: lambda value, field, config: validate_identifier(value, field, config),
    FieldKind.AGENT_NAME: lambda value, field, config: validate_agent_name(value, field, config),
    FieldKind.VERSION: lambda value, field, config: validate_version(value, field, config),
    FieldKind.SKILL_ID: lambda value, field, config: validate_skill_id(value, field, config),
}


def validate_field(
    kind: FieldKind,
    value: Any,
    field: Optional[str] = None,
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Validate a raw value according to its semantic field kind"""
    return _FIELD_VALIDATORS[FieldKind(kind)](value, field or FieldKind(kind).value, config)
