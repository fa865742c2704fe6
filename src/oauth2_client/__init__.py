from oauth2_client.errors import (
    ConfigurationError,
    OAuth2Error,
    ProtocolError,
    StateMismatchError,
    UnknownTokenTypeError,
)
from oauth2_client.shared.auth import DEFAULT_TOKEN_TYPE, AccessToken, AuthRequest, EndpointConfig

__all__ = [
    "DEFAULT_TOKEN_TYPE",
    "AccessToken",
    "AuthRequest",
    "ConfigurationError",
    "EndpointConfig",
    "OAuth2Error",
    "ProtocolError",
    "StateMismatchError",
    "UnknownTokenTypeError",
]
