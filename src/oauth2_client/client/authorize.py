"""
Builds the authorization request the user agent is redirected to.

See https://datatracker.ietf.org/doc/html/rfc6749#section-4.1.1
"""

import logging
from typing import Any

import httpx

from oauth2_client.client.validation import require_fields
from oauth2_client.shared.auth import AuthRequest, EndpointConfig

logger = logging.getLogger(__name__)


def make_auth_request(config: EndpointConfig, state: str | None = None) -> AuthRequest:
    """Create the authorization request for the given endpoint.

    The authorization parameters are merged onto whatever query the configured
    `authorization_uri` already carries. `state` is echoed back by the server on
    the redirect and should be checked with `get_access_token`.
    """
    require_fields(config, "authorization_uri", "client_id", operation="Authorization request")

    auth_params: dict[str, Any] = {"client_id": config.client_id}
    if config.redirect_uri is not None:
        auth_params["redirect_uri"] = config.redirect_uri
    auth_params["response_type"] = "code"

    if state:
        auth_params["state"] = state
    if config.access_type:
        auth_params["access_type"] = config.access_type
    if config.scope:
        auth_params["scope"] = " ".join(config.scope)
    if config.prompt:
        auth_params["prompt"] = " ".join(config.prompt)
    if config.include_granted_scopes:
        auth_params["include_granted_scopes"] = config.include_granted_scopes
    if config.login_hint:
        auth_params["login_hint"] = config.login_hint

    authorization_url = httpx.URL(config.authorization_uri).copy_merge_params(auth_params)
    logger.debug(f"Built authorization request for client {config.client_id}")

    return AuthRequest(uri=str(authorization_url), scope=config.scope, state=state)
