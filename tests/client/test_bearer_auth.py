"""
Tests for attaching access tokens to requests.
"""

import httpx
import pytest

from oauth2_client.client.bearer_auth import (
    TOKEN_TYPES,
    add_access_token,
    register_token_type,
    with_access_token,
)
from oauth2_client.errors import ConfigurationError, UnknownTokenTypeError
from oauth2_client.shared.auth import AccessToken


@pytest.fixture
def request_():
    return httpx.Request("GET", "http://localhost:18080/some-resource?foo=bar")


def test_bearer_token_in_header(request_):
    token = AccessToken(access_token="sesame", token_type="bearer")

    assert add_access_token(request_, token) is True
    assert request_.headers["Authorization"] == "Bearer sesame"
    assert request_.url.params == httpx.QueryParams({"foo": "bar"})


def test_bearer_token_in_query(request_):
    token = AccessToken(access_token="sesame", token_type="bearer", query_param="access_token")

    assert add_access_token(request_, token) is True
    assert "Authorization" not in request_.headers
    assert request_.url.params == httpx.QueryParams({"foo": "bar", "access_token": "sesame"})


def test_token_type_is_case_insensitive(request_):
    token = AccessToken(access_token="sesame", token_type="Bearer")

    assert add_access_token(request_, token) is True
    assert request_.headers["Authorization"] == "Bearer sesame"


def test_draft_10_token_in_header(request_):
    token = AccessToken(access_token="sesame", token_type="draft-10")

    assert add_access_token(request_, token) is True
    assert request_.headers["Authorization"] == "OAuth sesame"


def test_token_without_type_is_not_attached(request_):
    token = AccessToken(access_token="sesame")

    assert token.token_type is None
    assert add_access_token(request_, token) is False
    assert "Authorization" not in request_.headers

    with pytest.raises(UnknownTokenTypeError) as exc_info:
        add_access_token(request_, token, raise_on_failure=True)

    assert exc_info.value.token_type is None


def test_draft_10_token_in_query(request_):
    token = AccessToken(access_token="sesame", token_type="draft-10", query_param="oauth_token")

    assert add_access_token(request_, token) is True
    assert "Authorization" not in request_.headers
    assert request_.url.params["oauth_token"] == "sesame"


def test_missing_access_token_leaves_request_alone(request_):
    token = AccessToken(token_type="bearer")

    assert add_access_token(request_, token, raise_on_failure=True) is False
    assert "Authorization" not in request_.headers
    assert str(request_.url) == "http://localhost:18080/some-resource?foo=bar"


@pytest.mark.parametrize("token_type", ["mac", None])
def test_unknown_token_type(request_, token_type):
    token = AccessToken(access_token="sesame", token_type=token_type)

    assert add_access_token(request_, token) is False
    assert "Authorization" not in request_.headers


def test_unknown_token_type_raises_when_strict(request_):
    token = AccessToken(access_token="sesame", token_type="mac")

    with pytest.raises(UnknownTokenTypeError) as exc_info:
        add_access_token(request_, token, raise_on_failure=True)

    assert exc_info.value.token_type == "mac"


def test_no_token(request_):
    assert add_access_token(request_, None) is False

    with pytest.raises(UnknownTokenTypeError):
        add_access_token(request_, None, raise_on_failure=True)


def test_registered_token_type(request_, monkeypatch):
    monkeypatch.setattr("oauth2_client.client.bearer_auth.TOKEN_TYPES", dict(TOKEN_TYPES))

    def attach_mac(request, token, raise_on_failure=False):
        request.headers["Authorization"] = f'MAC id="{token.access_token}"'
        return True

    register_token_type("MAC", attach_mac)

    assert add_access_token(request_, AccessToken(access_token="sesame", token_type="mac")) is True
    assert request_.headers["Authorization"] == 'MAC id="sesame"'


def test_with_access_token():
    token = AccessToken(access_token="sesame", token_type="bearer", query_param="access_token")

    uri = with_access_token("http://localhost:18080/some-resource?foo=bar", token)

    assert httpx.URL(uri).params == httpx.QueryParams({"foo": "bar", "access_token": "sesame"})


def test_with_access_token_requires_query_param():
    with pytest.raises(ConfigurationError):
        with_access_token("http://localhost:18080/", AccessToken(access_token="sesame", token_type="bearer"))
