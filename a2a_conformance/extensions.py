"""
Agent extension validation

An extension entry is valid when its URI is well-formed, its parameters
satisfy the constraints registered for that extension, and, when it is
marked required, the caller supports it. The last check lets a client
pre-flight an agent card against its own capabilities.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Collection, Dict, List, Optional, Tuple

from pydantic import BaseModel

from .config import DEFAULT_VALIDATION_CONFIG, ValidationConfig
from .errors import Failure, MissingRequiredExtension, Result, Success, invalid_field, with_field_prefix
from .types import AgentExtension
from .validation import validate_description, validate_uri, validate_url

logger = logging.getLogger(__name__)


class ExtensionParamSchema(BaseModel):
    """Constraints an extension declares for its params"""
    model_config = {"frozen": True}

    required_params: Tuple[str, ...] = ()
    string_params: Tuple[str, ...] = ()
    non_empty_string_params: Tuple[str, ...] = ()
    url_params: Tuple[str, ...] = ()
    list_params: Tuple[str, ...] = ()


AUTH_EXTENSION_SCHEMA = ExtensionParamSchema(
    non_empty_string_params=("clientId",),
    list_params=("scopes",),
    url_params=("redirectUri",),
)

WEBHOOK_EXTENSION_SCHEMA = ExtensionParamSchema(
    non_empty_string_params=("url",),
    url_params=("url",),
    string_params=("secret",),
    list_params=("events",),
)


@dataclass(frozen=True)
class ExtensionRegistry:
    """
    Lookup of parameter constraints by extension URI.

    Exact URI registrations win; otherwise the first keyword rule whose
    keyword appears in the URI applies.
    """
    schemas: Dict[str, ExtensionParamSchema] = field(default_factory=dict)
    keyword_rules: Tuple[Tuple[Tuple[str, ...], ExtensionParamSchema], ...] = ()

    def schema_for(self, uri: str) -> Optional[ExtensionParamSchema]:
        if uri in self.schemas:
            return self.schemas[uri]
        lowered = uri.lower()
        for keywords, schema in self.keyword_rules:
            if any(keyword in lowered for keyword in keywords):
                return schema
        return None

    def register(self, uri: str, schema: ExtensionParamSchema) -> 'ExtensionRegistry':
        """Return a new registry with the schema registered for the URI"""
        return ExtensionRegistry(schemas={**self.schemas, uri: schema}, keyword_rules=self.keyword_rules)


DEFAULT_EXTENSION_REGISTRY = ExtensionRegistry(
    keyword_rules=(
        (("oauth", "auth"), AUTH_EXTENSION_SCHEMA),
        (("webhook", "notification"), WEBHOOK_EXTENSION_SCHEMA),
    )
)


def validate_extension_params(
    params: Any,
    schema: Optional[ExtensionParamSchema],
    config: Optional[ValidationConfig] = None
) -> Result[Any, Any]:
    """Pure function to check extension params against a schema"""
    if params is None:
        if schema and schema.required_params:
            return invalid_field("params", params, f"missing required parameter '{schema.required_params[0]}'")
        return Success(params)
    if not isinstance(params, dict):
        return invalid_field("params", params, "must be an object")
    if schema is None:
        return Success(params)

    for name in schema.required_params:
        if name not in params:
            return invalid_field(f"params.{name}", None, "is a required parameter")

    for name in schema.non_empty_string_params:
        if name in params and (not isinstance(params[name], str) or not params[name]):
            return invalid_field(f"params.{name}", params[name], "must be a non-empty string")

    for name in schema.string_params:
        if name in params and not isinstance(params[name], str):
            return invalid_field(f"params.{name}", params[name], "must be a string")

    for name in schema.url_params:
        if name in params:
            url_result = validate_url(params[name], f"params.{name}", config)
            if isinstance(url_result, Failure):
                return url_result

    for name in schema.list_params:
        if name in params and not isinstance(params[name], list):
            return invalid_field(f"params.{name}", params[name], "must be an array")

    return Success(params)


def validate_extension(
    extension: AgentExtension,
    supported_extensions: Optional[Collection[str]] = None,
    registry: Optional[ExtensionRegistry] = None,
    config: Optional[ValidationConfig] = None
) -> Result[AgentExtension, Any]:
    """
    Validate an extension declaration.

    Args:
        extension: The declared extension
        supported_extensions: URIs the caller supports; when given, a required
            extension outside this set fails with MissingRequiredExtension
        registry: Parameter constraints by URI
        config: Validation limits

    Returns:
        Success with the extension or the first Failure encountered
    """
    registry = registry or DEFAULT_EXTENSION_REGISTRY

    uri_result = validate_uri(extension.uri, "uri", config)
    if isinstance(uri_result, Failure):
        return uri_result

    params_result = validate_extension_params(extension.params, registry.schema_for(extension.uri), config)
    if isinstance(params_result, Failure):
        return params_result

    description_result = validate_description(
        extension.description,
        max_length=(config or DEFAULT_VALIDATION_CONFIG).max_extension_description_length,
        config=config
    )
    if isinstance(description_result, Failure):
        return description_result

    if extension.required and supported_extensions is not None and extension.uri not in supported_extensions:
        logger.debug("Required extension %s is not supported by the caller", extension.uri)
        return Failure(error=MissingRequiredExtension(uri=extension.uri))

    return Success(extension)


def check_required_extensions(
    extensions: Optional[List[AgentExtension]],
    supported_extensions: Collection[str],
    registry: Optional[ExtensionRegistry] = None,
    config: Optional[ValidationConfig] = None
) -> Result[List[AgentExtension], Any]:
    """Validate a list of extensions against the caller's supported set"""
    for index, extension in enumerate(extensions or []):
        result = validate_extension(extension, supported_extensions, registry, config)
        if isinstance(result, Failure):
            return with_field_prefix(result, f"extensions[{index}]")
    return Success(list(extensions or []))


def required_extension_uris(extensions: Optional[List[AgentExtension]]) -> List[str]:
    """URIs of the extensions a client must support"""
    return [extension.uri for extension in extensions or [] if extension.required]
