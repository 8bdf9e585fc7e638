"""
Pure functional Agent Card construction and validation
Checks that an agent's discovery card is well-formed before it is published
or trusted
"""

import logging
from typing import Any, Collection, Dict, List, Optional

from pydantic import ValidationError

from .config import DEFAULT_VALIDATION_CONFIG, ValidationConfig
from .errors import Failure, Result, Success, from_validation_error, invalid_field, with_field_prefix
from .extensions import ExtensionRegistry, check_required_extensions, validate_extension
from .security import validate_security_schemes
from .types import AgentCapabilities, AgentCard, AgentSkill
from .validation import (
    validate_agent_name,
    validate_media_type,
    validate_non_empty_string,
    validate_skill_id,
    validate_url,
    validate_version,
)

logger = logging.getLogger(__name__)

DEFAULT_MODES = ["text/plain", "application/json"]


def _validate_modes(modes: Optional[List[str]], field: str, required: bool) -> Result[Any, Any]:
    if not modes:
        if required:
            return invalid_field(field, modes, "must list at least one media type")
        return Success(modes)
    for index, mode in enumerate(modes):
        result = validate_media_type(mode, f"{field}[{index}]")
        if isinstance(result, Failure):
            return result
    return Success(modes)


def validate_skill(skill: AgentSkill, config: Optional[ValidationConfig] = None) -> Result[AgentSkill, Any]:
    """Validate a single skill: id, name, description, tags and modes"""
    checks = [
        validate_skill_id(skill.id, "id", config),
        validate_non_empty_string(skill.name, "name"),
        validate_non_empty_string(skill.description, "description"),
    ]
    for result in checks:
        if isinstance(result, Failure):
            return result

    if not skill.tags:
        return invalid_field("tags", skill.tags, "must contain at least one tag")
    for index, tag in enumerate(skill.tags):
        result = validate_non_empty_string(tag, f"tags[{index}]")
        if isinstance(result, Failure):
            return result

    for field, modes in (("inputModes", skill.input_modes), ("outputModes", skill.output_modes)):
        result = _validate_modes(modes, field, required=False)
        if isinstance(result, Failure):
            return result

    return Success(skill)


def _validate_optional_url(value: Optional[str], field: str, config: Optional[ValidationConfig]) -> Result[Any, Any]:
    return validate_url(value, field, config) if value is not None else Success(value)


def _validate_security_requirements(card: AgentCard) -> Result[Any, Any]:
    declared = set(card.security_schemes or {})
    for index, requirement in enumerate(card.security or []):
        for name in requirement:
            if name not in declared:
                return invalid_field(
                    f"security[{index}]", name,
                    f"references undeclared security scheme '{name}'"
                )
    return Success(card.security)


def validate_agent_card(
    card: AgentCard,
    config: Optional[ValidationConfig] = None,
    registry: Optional[ExtensionRegistry] = None
) -> Result[AgentCard, Any]:
    """
    Pure function to validate an Agent Card.

    Checks run in a fixed order (identity fields, URLs, modes, skills,
    interfaces, capability extensions, security) and the first violation is
    returned.
    """
    protocol_result = validate_non_empty_string(card.protocol_version, "protocolVersion")
    if isinstance(protocol_result, Failure):
        return protocol_result

    identity_checks = [
        validate_agent_name(card.name, "name", config),
        validate_non_empty_string(card.description, "description"),
        validate_version(card.version, "version", config),
        validate_url(card.url, "url", config),
    ]
    for result in identity_checks:
        if isinstance(result, Failure):
            return result

    if card.preferred_transport is not None:
        result = validate_non_empty_string(card.preferred_transport, "preferredTransport")
        if isinstance(result, Failure):
            return result

    if card.provider is not None:
        provider_checks = [
            validate_non_empty_string(card.provider.organization, "provider.organization"),
            validate_url(card.provider.url, "provider.url", config),
        ]
        for result in provider_checks:
            if isinstance(result, Failure):
                return result

    for field, value in (("documentationUrl", card.documentation_url), ("iconUrl", card.icon_url)):
        result = _validate_optional_url(value, field, config)
        if isinstance(result, Failure):
            return result

    for field, modes in (("defaultInputModes", card.default_input_modes),
                         ("defaultOutputModes", card.default_output_modes)):
        result = _validate_modes(modes, field, required=True)
        if isinstance(result, Failure):
            return result

    if not card.skills:
        return invalid_field("skills", card.skills, "must contain at least one skill")
    seen_skills = set()
    for index, skill in enumerate(card.skills):
        result = validate_skill(skill, config)
        if isinstance(result, Failure):
            return with_field_prefix(result, f"skills[{index}]")
        if skill.id in seen_skills:
            return invalid_field(f"skills[{index}].id", skill.id, "duplicate skill id")
        seen_skills.add(skill.id)

    for index, interface in enumerate(card.additional_interfaces or []):
        interface_checks = [
            validate_url(interface.url, f"additionalInterfaces[{index}].url", config),
            validate_non_empty_string(interface.transport, f"additionalInterfaces[{index}].transport"),
        ]
        for result in interface_checks:
            if isinstance(result, Failure):
                return result

    for index, extension in enumerate(card.capabilities.extensions or []):
        result = validate_extension(extension, registry=registry, config=config)
        if isinstance(result, Failure):
            return with_field_prefix(result, f"capabilities.extensions[{index}]")

    if card.security_schemes:
        result = validate_security_schemes(card.security_schemes, config)
        if isinstance(result, Failure):
            return result

    requirements_result = _validate_security_requirements(card)
    if isinstance(requirements_result, Failure):
        return requirements_result

    return Success(card)


def check_agent_card_extensions(
    card: AgentCard,
    supported_extensions: Collection[str],
    registry: Optional[ExtensionRegistry] = None,
    config: Optional[ValidationConfig] = None
) -> Result[AgentCard, Any]:
    """Pre-flight an agent card's required extensions against what the caller supports"""
    result = check_required_extensions(card.capabilities.extensions, supported_extensions, registry, config)
    if isinstance(result, Failure):
        logger.debug("Agent card %s requires an unsupported extension", card.name)
        return with_field_prefix(result, "capabilities")
    return Success(card)


def create_agent_card(
    name: str,
    description: str,
    url: str,
    version: str,
    skills: List[Any],
    default_input_modes: Optional[List[str]] = None,
    default_output_modes: Optional[List[str]] = None,
    capabilities: Optional[AgentCapabilities] = None,
    provider: Optional[Dict[str, str]] = None,
    security_schemes: Optional[Dict[str, Any]] = None,
    security: Optional[List[Dict[str, List[str]]]] = None,
    documentation_url: Optional[str] = None,
    icon_url: Optional[str] = None,
    preferred_transport: str = "JSONRPC",
    additional_interfaces: Optional[List[Any]] = None,
    supports_authenticated_extended_card: Optional[bool] = None,
    config: Optional[ValidationConfig] = None,
    registry: Optional[ExtensionRegistry] = None
) -> Result[AgentCard, Any]:
    """Pure function to build and validate an Agent Card"""
    resolved = config or DEFAULT_VALIDATION_CONFIG
    try:
        card = AgentCard(
            protocolVersion=resolved.protocol_version,
            name=name,
            description=description,
            url=url,
            preferredTransport=preferred_transport,
            version=version,
            provider=provider,
            capabilities=capabilities or AgentCapabilities(
                streaming=True,
                pushNotifications=False,
                stateTransitionHistory=True
            ),
            defaultInputModes=default_input_modes if default_input_modes is not None else list(DEFAULT_MODES),
            defaultOutputModes=default_output_modes if default_output_modes is not None else list(DEFAULT_MODES),
            skills=skills,
            documentationUrl=documentation_url,
            iconUrl=icon_url,
            supportsAuthenticatedExtendedCard=supports_authenticated_extended_card,
            additionalInterfaces=additional_interfaces,
            securitySchemes=security_schemes,
            security=security,
        )
    except ValidationError as error:
        return from_validation_error(error)

    return validate_agent_card(card, config, registry)


def create_minimal_agent_card(
    name: str,
    description: str,
    url: str = "http://localhost:3000/a2a",
    version: str = "1.0.0",
    config: Optional[ValidationConfig] = None
) -> Result[AgentCard, Any]:
    """Pure function to create a minimal Agent Card with a single general skill"""
    return create_agent_card(
        name=name,
        description=description,
        url=url,
        version=version,
        skills=[AgentSkill(
            id="general",
            name="General Assistant",
            description="General purpose assistance",
            tags=["general", "assistant"],
            examples=["How can I help you?"]
        )],
        default_input_modes=["text/plain"],
        default_output_modes=["text/plain"],
        capabilities=AgentCapabilities(streaming=True, pushNotifications=False, stateTransitionHistory=False),
        config=config,
    )


def parse_agent_card(
    raw: Any,
    config: Optional[ValidationConfig] = None,
    registry: Optional[ExtensionRegistry] = None
) -> Result[AgentCard, Any]:
    """Parse a raw agent card record and validate it"""
    if not isinstance(raw, dict):
        return invalid_field("agentCard", raw, "must be an object")
    try:
        card = AgentCard.model_validate(raw)
    except ValidationError as error:
        return from_validation_error(error)
    return validate_agent_card(card, config, registry)
