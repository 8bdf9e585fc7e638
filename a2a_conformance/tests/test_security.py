"""
Tests for A2A security scheme validation
"""

import pytest

from a2a_conformance.errors import Failure, IncompleteSecurityScheme, InvalidField, Success
from a2a_conformance.security import (
    get_provider_base_url,
    parse_security_scheme,
    requires_user_interaction,
    scheme_type,
    supports_client_only_flows,
    validate_security_scheme,
    validate_security_schemes,
)
from a2a_conformance.types import (
    APIKeySecurityScheme,
    AuthorizationCodeOAuthFlow,
    ClientCredentialsOAuthFlow,
    HTTPAuthSecurityScheme,
    ImplicitOAuthFlow,
    OAuth2SecurityScheme,
    OAuthFlows,
    OpenIdConnectSecurityScheme,
    PasswordOAuthFlow,
)


def oauth2(**flows) -> OAuth2SecurityScheme:
    return OAuth2SecurityScheme(flows=OAuthFlows(**flows))


class TestAPIKeyScheme:
    """Test API key scheme validation"""

    def test_header_key_is_accepted(self):
        """Test X-Api-Key in a header"""
        scheme = APIKeySecurityScheme(name="X-Api-Key", in_="header")

        assert validate_security_scheme(scheme) == Success(scheme)

    def test_empty_name_is_rejected(self):
        """Test an empty key name"""
        result = validate_security_scheme(APIKeySecurityScheme(name="", in_="header"))

        assert isinstance(result, Failure)
        assert result.error.variant == "apiKey"
        assert result.error.field == "name"

    def test_name_checked_before_location(self):
        """Test the first violation in field order is reported"""
        result = validate_security_scheme(APIKeySecurityScheme(name=None, in_="body"))

        assert result.error.field == "name"

    @pytest.mark.parametrize("location", [None, "", "body", "Header"])
    def test_invalid_location_is_rejected(self, location):
        result = validate_security_scheme(APIKeySecurityScheme(name="api_key", in_=location))

        assert isinstance(result, Failure)
        assert result.error.field == "in"

    @pytest.mark.parametrize("name,location", [
        ("X Api Key", "header"),
        ("api&key", "query"),
        ("api=key", "query"),
        ("session;id", "cookie"),
        ("Authorization", "header"),
        ("authorization", "header"),
    ])
    def test_location_specific_name_rules(self, name, location):
        """Test names that cannot be used at their location"""
        result = validate_security_scheme(APIKeySecurityScheme(name=name, in_=location))

        assert isinstance(result, Failure)
        assert result.error.field == "name"

    @pytest.mark.parametrize("name,location", [("api_key", "query"), ("session-id", "cookie")])
    def test_valid_query_and_cookie_names(self, name, location):
        assert isinstance(validate_security_scheme(APIKeySecurityScheme(name=name, in_=location)), Success)

    def test_description_bound(self):
        scheme = APIKeySecurityScheme(name="X-Api-Key", in_="header", description="x" * 501)

        assert validate_security_scheme(scheme).error.field == "description"


class TestHTTPScheme:
    """Test HTTP authentication scheme validation"""

    def test_bearer_with_format(self):
        scheme = HTTPAuthSecurityScheme(scheme="bearer", bearer_format="JWT")

        assert validate_security_scheme(scheme) == Success(scheme)

    def test_basic(self):
        assert isinstance(validate_security_scheme(HTTPAuthSecurityScheme(scheme="basic")), Success)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_scheme(self, value):
        result = validate_security_scheme(HTTPAuthSecurityScheme(scheme=value))

        assert result.error == IncompleteSecurityScheme(
            variant="http", field="scheme", reason="is required and cannot be empty"
        )

    def test_empty_bearer_format(self):
        result = validate_security_scheme(HTTPAuthSecurityScheme(scheme="bearer", bearer_format=" "))

        assert result.error.field == "bearerFormat"

    def test_bearer_format_only_for_bearer(self):
        result = validate_security_scheme(HTTPAuthSecurityScheme(scheme="basic", bearer_format="JWT"))

        assert result.error.field == "bearerFormat"


class TestOAuth2Scheme:
    """Test OAuth2 scheme validation"""

    def test_authorization_code_without_token_url(self):
        """Test the failure names the authorizationCode flow"""
        scheme = oauth2(authorization_code=AuthorizationCodeOAuthFlow(
            authorization_url="https://auth.example.com/authorize"
        ))

        result = validate_security_scheme(scheme)

        assert isinstance(result, Failure)
        assert result.error == IncompleteSecurityScheme(
            variant="oauth2", field="tokenUrl", reason="is required", flow="authorizationCode"
        )

    def test_complete_authorization_code_flow(self):
        scheme = oauth2(authorization_code=AuthorizationCodeOAuthFlow(
            authorization_url="https://auth.example.com/authorize",
            token_url="https://auth.example.com/token",
            refresh_url="https://auth.example.com/refresh",
            scopes={"read": "Read access", "write": "Write access"}
        ))

        assert validate_security_scheme(scheme) == Success(scheme)

    def test_no_flows(self):
        result = validate_security_scheme(OAuth2SecurityScheme())

        assert result.error.field == "flows"
        assert result.error.flow is None

    @pytest.mark.parametrize("flows,flow_name,field", [
        ({"client_credentials": ClientCredentialsOAuthFlow()}, "clientCredentials", "tokenUrl"),
        ({"implicit": ImplicitOAuthFlow()}, "implicit", "authorizationUrl"),
        ({"password": PasswordOAuthFlow()}, "password", "tokenUrl"),
        ({"authorization_code": AuthorizationCodeOAuthFlow(token_url="https://a.example.com/t")},
         "authorizationCode", "authorizationUrl"),
    ])
    def test_required_urls_per_flow(self, flows, flow_name, field):
        result = validate_security_scheme(oauth2(**flows))

        assert isinstance(result, Failure)
        assert result.error.flow == flow_name
        assert result.error.field == field

    def test_flows_checked_in_fixed_order(self):
        """Test authorizationCode is reported before password"""
        scheme = oauth2(
            password=PasswordOAuthFlow(),
            authorization_code=AuthorizationCodeOAuthFlow(),
        )

        assert validate_security_scheme(scheme).error.flow == "authorizationCode"

    @pytest.mark.parametrize("token_url", [
        "not a url",
        "https://auth.example.com:abc/token",
        "https://auth.example.com:99999/token",
    ])
    def test_invalid_token_url(self, token_url):
        scheme = oauth2(client_credentials=ClientCredentialsOAuthFlow(token_url=token_url))

        result = validate_security_scheme(scheme)

        assert result.error.field == "tokenUrl"
        assert result.error.flow == "clientCredentials"

    def test_invalid_refresh_url(self):
        scheme = oauth2(client_credentials=ClientCredentialsOAuthFlow(
            token_url="https://auth.example.com/token", refresh_url="refresh"
        ))

        assert validate_security_scheme(scheme).error.field == "refreshUrl"

    @pytest.mark.parametrize("scope", ["", "read write"])
    def test_invalid_scope_names(self, scope):
        scheme = oauth2(client_credentials=ClientCredentialsOAuthFlow(
            token_url="https://auth.example.com/token", scopes={scope: "desc"}
        ))

        assert validate_security_scheme(scheme).error.field == "scopes"

    def test_empty_scopes_allowed(self):
        scheme = oauth2(client_credentials=ClientCredentialsOAuthFlow(token_url="https://auth.example.com/token"))

        assert isinstance(validate_security_scheme(scheme), Success)


class TestOpenIdConnectScheme:
    """Test OpenID Connect scheme validation"""

    def test_discovery_url(self):
        scheme = OpenIdConnectSecurityScheme(
            open_id_connect_url="https://accounts.example.com/.well-known/openid-configuration"
        )

        assert validate_security_scheme(scheme) == Success(scheme)

    @pytest.mark.parametrize("url,reason_fragment", [
        (None, "required"),
        ("", "required"),
        ("not-a-url", "absolute"),
        ("http://accounts.example.com/.well-known/openid-configuration", "HTTPS"),
        ("https://accounts.example.com/config", "discovery"),
    ])
    def test_invalid_discovery_urls(self, url, reason_fragment):
        result = validate_security_scheme(OpenIdConnectSecurityScheme(open_id_connect_url=url))

        assert isinstance(result, Failure)
        assert result.error.field == "openIdConnectUrl"
        assert reason_fragment in result.error.reason

    def test_provider_base_url(self):
        scheme = OpenIdConnectSecurityScheme(
            open_id_connect_url="https://accounts.example.com/.well-known/openid-configuration"
        )

        assert get_provider_base_url(scheme) == "https://accounts.example.com"


class TestParsingAndHelpers:
    """Test parsing raw records and helper predicates"""

    def test_parse_api_key_record(self):
        result = parse_security_scheme({"type": "apiKey", "name": "X-Api-Key", "in": "header"})

        assert isinstance(result, Success)
        assert isinstance(result.data, APIKeySecurityScheme)
        assert result.data.in_ == "header"

    def test_parse_oauth2_record(self):
        result = parse_security_scheme({
            "type": "oauth2",
            "flows": {"clientCredentials": {"tokenUrl": "https://auth.example.com/token", "scopes": {}}}
        })

        assert isinstance(result, Success)
        assert supports_client_only_flows(result.data)
        assert not requires_user_interaction(result.data)

    def test_parse_incomplete_record(self):
        result = parse_security_scheme({"type": "oauth2", "flows": {"implicit": {"scopes": {}}}})

        assert result.error.flow == "implicit"

    def test_parse_unknown_type(self):
        result = parse_security_scheme({"type": "mutualTLS"})

        assert isinstance(result.error, InvalidField)
        assert result.error.field == "securityScheme.type"

    def test_unrecognized_shape_is_rejected(self):
        """Test values outside the closed variant set"""
        result = validate_security_scheme({"type": "apiKey", "name": "k", "in": "header"})

        assert isinstance(result.error, InvalidField)

    def test_validate_mapping_reports_first_invalid(self):
        schemes = {
            "apiKey": APIKeySecurityScheme(name="X-Api-Key", in_="header"),
            "bearer": HTTPAuthSecurityScheme(scheme=""),
        }

        result = validate_security_schemes(schemes)

        assert result.error.variant == "http"
        assert result.error.scheme_name == "bearer"
        assert "bearer" in result.error.message

    def test_validate_mapping_names_which_of_two_oauth2_schemes_failed(self):
        """Test two schemes of the same variant are told apart by name"""
        complete = oauth2(client_credentials=ClientCredentialsOAuthFlow(token_url="https://auth.example.com/token"))
        schemes = {
            "partner": complete,
            "internal": oauth2(client_credentials=ClientCredentialsOAuthFlow()),
        }

        result = validate_security_schemes(schemes)

        assert result.error == IncompleteSecurityScheme(
            variant="oauth2", field="tokenUrl", reason="is required", flow="clientCredentials", scheme_name="internal"
        )

    def test_validate_mapping_prefixes_unrecognized_entries(self):
        result = validate_security_schemes({"custom": {"type": "apiKey", "name": "k", "in": "header"}})

        assert isinstance(result.error, InvalidField)
        assert result.error.field.startswith("securitySchemes.custom")

    def test_scheme_type(self):
        assert scheme_type(HTTPAuthSecurityScheme(scheme="bearer")) == "http"
        assert scheme_type(OpenIdConnectSecurityScheme()) == "openIdConnect"

    def test_requires_user_interaction(self):
        assert requires_user_interaction(oauth2(implicit=ImplicitOAuthFlow()))
        assert requires_user_interaction(OpenIdConnectSecurityScheme())
        assert not requires_user_interaction(APIKeySecurityScheme(name="k", in_="header"))
