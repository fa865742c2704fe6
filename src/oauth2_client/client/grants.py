"""
Grant-specific token request fields.

A grant strategy extends an in-progress token request with the fields its
grant type needs. New grant types are added with `register_grant_type`.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from oauth2_client.errors import ConfigurationError
from oauth2_client.shared.auth import EndpointConfig


@dataclass
class TokenRequest:
    """Headers and form body of a token request that is still being built."""

    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)


class GrantStrategy(Protocol):
    def __call__(self, request: TokenRequest, config: EndpointConfig, params: Mapping[str, Any]) -> TokenRequest: ...


def authorization_code_grant(request: TokenRequest, config: EndpointConfig, params: Mapping[str, Any]) -> TokenRequest:
    # See https://datatracker.ietf.org/doc/html/rfc6749#section-4.1.3
    if params.get("code") is None:
        raise ConfigurationError("authorization_code grant requires a code")
    if config.redirect_uri is None:
        raise ConfigurationError("authorization_code grant requires redirect_uri in the endpoint configuration")

    request.body["code"] = params["code"]
    request.body["redirect_uri"] = config.redirect_uri
    return request


def password_grant(request: TokenRequest, config: EndpointConfig, params: Mapping[str, Any]) -> TokenRequest:
    # See https://datatracker.ietf.org/doc/html/rfc6749#section-4.3.2
    request.body["username"] = params.get("username")
    request.body["password"] = params.get("password")
    return request


GRANT_TYPES: dict[str, GrantStrategy] = {
    "authorization_code": authorization_code_grant,
    "password": password_grant,
}


def register_grant_type(grant_type: str, strategy: GrantStrategy) -> None:
    """Register (or replace) the strategy used for `grant_type`."""
    GRANT_TYPES[grant_type] = strategy


def prepare_grant(request: TokenRequest, config: EndpointConfig, params: Mapping[str, Any]) -> TokenRequest:
    strategy = GRANT_TYPES.get(str(config.grant_type))
    if strategy is None:
        raise ConfigurationError(f"Grant type {config.grant_type} not supported")
    return strategy(request, config, params)
