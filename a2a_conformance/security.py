"""
Security scheme validation for A2A agent cards

Checks that each scheme variant carries the fields its authentication
mechanism needs. Fields are checked in a fixed order and the first violation
is reported, so outcomes are deterministic.
"""

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from .config import ValidationConfig
from .errors import Failure, IncompleteSecurityScheme, Result, Success, invalid_field, with_field_prefix
from .types import (
    APIKeySecurityScheme,
    HTTPAuthSecurityScheme,
    OAuth2SecurityScheme,
    OpenIdConnectSecurityScheme,
    SecurityScheme,
)
from .validation import validate_description, validate_url

logger = logging.getLogger(__name__)

API_KEY_LOCATIONS = ("query", "header", "cookie")

# Flow name -> (python attribute, required URL fields as (attribute, wire name))
OAUTH2_FLOW_REQUIREMENTS: Dict[str, Tuple[str, Tuple[Tuple[str, str], ...]]] = {
    "authorizationCode": ("authorization_code", (
        ("authorization_url", "authorizationUrl"),
        ("token_url", "tokenUrl"),
    )),
    "clientCredentials": ("client_credentials", (("token_url", "tokenUrl"),)),
    "implicit": ("implicit", (("authorization_url", "authorizationUrl"),)),
    "password": ("password", (("token_url", "tokenUrl"),)),
}

_API_KEY_FORBIDDEN_CHARS = {
    "header": (" ",),
    "query": (" ", "&", "="),
    "cookie": (" ", ";", "="),
}

_OIDC_DISCOVERY_PATHS = ("/.well-known/openid-configuration", "/.well-known/openid_configuration")

_security_scheme_adapter: TypeAdapter = TypeAdapter(SecurityScheme)

SecuritySchemeResult = Result[Any, IncompleteSecurityScheme]


def _incomplete(variant: str, field: str, reason: str, flow: Optional[str] = None) -> Failure[IncompleteSecurityScheme]:
    logger.debug("Rejected %s security scheme: %s %s", variant, field, reason)
    return Failure(error=IncompleteSecurityScheme(variant=variant, field=field, reason=reason, flow=flow))


def _check_description(variant: str, description: Optional[str], config: Optional[ValidationConfig]) -> Optional[Failure]:
    result = validate_description(description, config=config)
    if isinstance(result, Failure):
        return _incomplete(variant, "description", result.error.constraint)
    return None


def validate_api_key_scheme(
    scheme: APIKeySecurityScheme,
    config: Optional[ValidationConfig] = None
) -> SecuritySchemeResult:
    """Validate an API key scheme: name, then location, then name rules for that location"""
    if not scheme.name:
        return _incomplete("apiKey", "name", "is required and cannot be empty")
    if not scheme.in_:
        return _incomplete("apiKey", "in", "is required")
    if scheme.in_ not in API_KEY_LOCATIONS:
        return _incomplete("apiKey", "in", f"must be one of {', '.join(API_KEY_LOCATIONS)}")

    forbidden = [char for char in _API_KEY_FORBIDDEN_CHARS[scheme.in_] if char in scheme.name]
    if forbidden:
        shown = ", ".join(repr(char) for char in forbidden)
        return _incomplete("apiKey", "name", f"cannot contain {shown} for {scheme.in_} keys")
    if scheme.in_ == "header" and scheme.name.lower() == "authorization":
        return _incomplete("apiKey", "name", "must not be Authorization; use an http scheme instead")

    return _check_description("apiKey", scheme.description, config) or Success(scheme)


def validate_http_scheme(
    scheme: HTTPAuthSecurityScheme,
    config: Optional[ValidationConfig] = None
) -> SecuritySchemeResult:
    """Validate an HTTP authentication scheme"""
    if not scheme.scheme or not scheme.scheme.strip():
        return _incomplete("http", "scheme", "is required and cannot be empty")

    if scheme.bearer_format is not None:
        if not scheme.bearer_format.strip():
            return _incomplete("http", "bearerFormat", "cannot be empty if specified")
        if scheme.scheme.lower() != "bearer":
            return _incomplete("http", "bearerFormat", "can only be specified for the bearer scheme")

    return _check_description("http", scheme.description, config) or Success(scheme)


def _validate_oauth2_flow(
    flow_name: str,
    flow: Any,
    required_urls: Tuple[Tuple[str, str], ...],
    config: Optional[ValidationConfig]
) -> Optional[Failure]:
    for attribute, wire_name in required_urls:
        url = getattr(flow, attribute)
        if not url:
            return _incomplete("oauth2", wire_name, "is required", flow=flow_name)
        url_result = validate_url(url, wire_name, config)
        if isinstance(url_result, Failure):
            return _incomplete("oauth2", wire_name, url_result.error.constraint, flow=flow_name)

    if flow.refresh_url is not None:
        url_result = validate_url(flow.refresh_url, "refreshUrl", config)
        if isinstance(url_result, Failure):
            return _incomplete("oauth2", "refreshUrl", url_result.error.constraint, flow=flow_name)

    for scope_name in flow.scopes:
        if not scope_name or not scope_name.strip():
            return _incomplete("oauth2", "scopes", "cannot contain an empty scope name", flow=flow_name)
        if any(char.isspace() for char in scope_name):
            return _incomplete("oauth2", "scopes", f"scope name {scope_name!r} cannot contain whitespace", flow=flow_name)

    return None


def validate_oauth2_scheme(
    scheme: OAuth2SecurityScheme,
    config: Optional[ValidationConfig] = None
) -> SecuritySchemeResult:
    """
    Validate an OAuth2 scheme and every flow it declares.

    Flows are checked in the order authorizationCode, clientCredentials,
    implicit, password. Within a flow, required endpoint URLs come first, then
    the optional refresh URL, then scope names.
    """
    declared = [
        (flow_name, getattr(scheme.flows, attribute), required_urls)
        for flow_name, (attribute, required_urls) in OAUTH2_FLOW_REQUIREMENTS.items()
        if getattr(scheme.flows, attribute) is not None
    ]
    if not declared:
        return _incomplete("oauth2", "flows", "must declare at least one flow")

    for flow_name, flow, required_urls in declared:
        failure = _validate_oauth2_flow(flow_name, flow, required_urls, config)
        if failure:
            return failure

    return _check_description("oauth2", scheme.description, config) or Success(scheme)


def validate_openid_connect_scheme(
    scheme: OpenIdConnectSecurityScheme,
    config: Optional[ValidationConfig] = None
) -> SecuritySchemeResult:
    """Validate an OpenID Connect scheme's discovery document URL"""
    url = scheme.open_id_connect_url
    if not url:
        return _incomplete("openIdConnect", "openIdConnectUrl", "is required")

    url_result = validate_url(url, "openIdConnectUrl", config)
    if isinstance(url_result, Failure):
        return _incomplete("openIdConnect", "openIdConnectUrl", url_result.error.constraint)
    if not url.lower().startswith("https://"):
        return _incomplete("openIdConnect", "openIdConnectUrl", "must use HTTPS")
    if not any(path in url for path in _OIDC_DISCOVERY_PATHS):
        return _incomplete(
            "openIdConnect", "openIdConnectUrl",
            "must point to a /.well-known/openid-configuration discovery document"
        )

    return _check_description("openIdConnect", scheme.description, config) or Success(scheme)


_SCHEME_VALIDATORS: Dict[type, Callable[..., SecuritySchemeResult]] = {
    APIKeySecurityScheme: validate_api_key_scheme,
    HTTPAuthSecurityScheme: validate_http_scheme,
    OAuth2SecurityScheme: validate_oauth2_scheme,
    OpenIdConnectSecurityScheme: validate_openid_connect_scheme,
}


def validate_security_scheme(
    scheme: Any,
    config: Optional[ValidationConfig] = None
) -> SecuritySchemeResult:
    """Validate any security scheme variant, rejecting unrecognized shapes"""
    validator = _SCHEME_VALIDATORS.get(type(scheme))
    if validator is None:
        return invalid_field("securityScheme", scheme, "is not a recognized security scheme variant")
    return validator(scheme, config)


def validate_security_schemes(
    schemes: Dict[str, Any],
    config: Optional[ValidationConfig] = None
) -> Result[Dict[str, Any], Any]:
    """Validate a name -> scheme mapping, reporting the first invalid entry and its name"""
    for name, scheme in schemes.items():
        if not name:
            return invalid_field("securitySchemes", name, "scheme names cannot be empty")
        result = validate_security_scheme(scheme, config)
        if isinstance(result, Failure):
            if isinstance(result.error, IncompleteSecurityScheme):
                return Failure(error=replace(result.error, scheme_name=name))
            return with_field_prefix(result, f"securitySchemes.{name}")
    return Success(schemes)


def parse_security_scheme(
    raw: Dict[str, Any],
    config: Optional[ValidationConfig] = None
) -> SecuritySchemeResult:
    """Parse a raw record into a security scheme variant and validate it"""
    if not isinstance(raw, dict):
        return invalid_field("securityScheme", raw, "must be an object")
    if raw.get("type") not in ("apiKey", "http", "oauth2", "openIdConnect"):
        return invalid_field(
            "securityScheme.type", raw.get("type"),
            "must be one of apiKey, http, oauth2, openIdConnect"
        )

    try:
        scheme = _security_scheme_adapter.validate_python(raw)
    except ValidationError as error:
        first = error.errors()[0]
        location = ".".join(str(part) for part in first["loc"][1:]) or "securityScheme"
        return invalid_field(f"securityScheme.{location}", first.get("input"), first["msg"])

    return validate_security_scheme(scheme, config)


def scheme_type(scheme: Any) -> str:
    """Get the wire discriminant of a security scheme"""
    return scheme.type


def requires_user_interaction(scheme: Any) -> bool:
    """Check if obtaining credentials for the scheme involves the end user"""
    if isinstance(scheme, OAuth2SecurityScheme):
        return scheme.flows.implicit is not None or scheme.flows.authorization_code is not None
    return isinstance(scheme, OpenIdConnectSecurityScheme)


def supports_client_only_flows(scheme: Any) -> bool:
    """Check if an OAuth2 scheme allows machine-to-machine authentication"""
    return isinstance(scheme, OAuth2SecurityScheme) and scheme.flows.client_credentials is not None


def get_provider_base_url(scheme: OpenIdConnectSecurityScheme) -> Optional[str]:
    """Get the OpenID provider's base URL from its discovery URL"""
    url = scheme.open_id_connect_url
    if url is None:
        return None
    position = url.find("/.well-known/")
    return url[:position] if position >= 0 else url
