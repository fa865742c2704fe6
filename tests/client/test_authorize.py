"""
Tests for building the authorization redirect.
"""

from urllib.parse import parse_qs, urlparse

import pytest

from oauth2_client.client.authorize import make_auth_request
from oauth2_client.errors import ConfigurationError
from oauth2_client.shared.auth import EndpointConfig


@pytest.fixture
def endpoint_auth_code():
    return EndpointConfig(
        client_id="foo",
        client_secret="bar",
        access_query_param="access_token",
        scope=["foo", "bar"],
        redirect_uri="http://my.host/cb",
        grant_type="authorization_code",
        authorization_uri="http://localhost:18080/auth",
        access_token_uri="http://localhost:18080/token-auth-code",
    )


def query_of(uri: str) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(urlparse(uri).query).items()}


def test_constructs_uri_for_authorization_redirect(endpoint_auth_code):
    auth_request = make_auth_request(endpoint_auth_code, "bazqux")

    parsed = urlparse(auth_request.uri)
    assert parsed.scheme == "http"
    assert parsed.hostname == "localhost"
    assert parsed.port == 18080
    assert parsed.path == "/auth"
    assert query_of(auth_request.uri) == {
        "response_type": "code",
        "client_id": "foo",
        "redirect_uri": "http://my.host/cb",
        "scope": "foo bar",
        "state": "bazqux",
    }


def test_echoes_scope_and_state(endpoint_auth_code):
    auth_request = make_auth_request(endpoint_auth_code, "bazqux")

    assert auth_request.state == "bazqux"
    assert list(auth_request.scope) == ["foo", "bar"]


def test_state_is_optional(endpoint_auth_code):
    auth_request = make_auth_request(endpoint_auth_code)

    assert auth_request.state is None
    assert "state" not in query_of(auth_request.uri)


def test_merges_onto_existing_query(endpoint_auth_code):
    config = endpoint_auth_code.model_copy(update={"authorization_uri": "https://example.com/auth?tenant=acme"})

    query = query_of(make_auth_request(config, "s").uri)

    assert query["tenant"] == "acme"
    assert query["client_id"] == "foo"
    assert query["response_type"] == "code"


def test_omits_redirect_uri_and_scope_when_not_configured():
    config = EndpointConfig(client_id="foo", authorization_uri="https://example.com/auth")

    assert query_of(make_auth_request(config).uri) == {"client_id": "foo", "response_type": "code"}


def test_includes_provider_extras(endpoint_auth_code):
    config = endpoint_auth_code.model_copy(
        update={
            "access_type": "offline",
            "prompt": ["consent", "select_account"],
            "include_granted_scopes": True,
            "login_hint": "user@example.com",
        }
    )

    query = query_of(make_auth_request(config, "s").uri)

    assert query["access_type"] == "offline"
    assert query["prompt"] == "consent select_account"
    assert query["include_granted_scopes"] == "true"
    assert query["login_hint"] == "user@example.com"


@pytest.mark.parametrize("missing", ["authorization_uri", "client_id"])
def test_requires_authorization_uri_and_client_id(endpoint_auth_code, missing):
    config = endpoint_auth_code.model_copy(update={missing: None})

    with pytest.raises(ConfigurationError, match=missing):
        make_auth_request(config, "bazqux")
