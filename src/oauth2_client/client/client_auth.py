"""
Client authentication for token requests.

See https://datatracker.ietf.org/doc/html/rfc6749#section-2.3.1
"""

import base64

from oauth2_client.client.grants import TokenRequest
from oauth2_client.client.validation import require_fields
from oauth2_client.shared.auth import EndpointConfig


def basic_auth_header(client_id: str, client_secret: str) -> str:
    credentials = f"{client_id}:{client_secret}".encode()
    return f"Basic {base64.b64encode(credentials).decode()}"


def client_secret_basic(request: TokenRequest, config: EndpointConfig) -> TokenRequest:
    """Send the client credentials in an HTTP Basic Authorization header."""
    request.headers["Authorization"] = basic_auth_header(str(config.client_id), str(config.client_secret))
    return request


def client_secret_post(request: TokenRequest, config: EndpointConfig) -> TokenRequest:
    """Send the client credentials as form body fields."""
    request.body["client_id"] = config.client_id
    request.body["client_secret"] = config.client_secret
    return request


def authenticate_client(request: TokenRequest, config: EndpointConfig) -> TokenRequest:
    require_fields(config, "client_id", "client_secret", operation="Client authentication")

    if config.authorization_header:
        return client_secret_basic(request, config)
    return client_secret_post(request, config)
