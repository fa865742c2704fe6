"""
Token endpoint client.

Exchanges an authorization code or resource owner credentials for an access
token, and refreshes access tokens. Each exchange is built as an httpx.Request,
sent once, and the httpx.Response is then decoded and classified.
"""

import logging
import secrets
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl

import httpx
from pydantic import ValidationError

from oauth2_client.client.client_auth import authenticate_client
from oauth2_client.client.grants import TokenRequest, prepare_grant
from oauth2_client.client.validation import require_fields
from oauth2_client.errors import ProtocolError, StateMismatchError
from oauth2_client.shared.auth import (
    DEFAULT_TOKEN_TYPE,
    AccessToken,
    AuthRequest,
    EndpointConfig,
    TokenErrorResponse,
)

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
# text/javascript is what Facebook answers with
JSON_CONTENT_TYPES = ("application/json", "text/javascript")

GENERIC_ERROR_MESSAGE = "error requesting access token"
GENERIC_ERROR_CODE = "unknown"

TOKEN_REQUEST_TIMEOUT = httpx.Timeout(10.0, connect=10.0, read=10.0)


def decode_token_response(response: httpx.Response) -> dict[str, Any]:
    """Decode a token endpoint body as JSON or as a form, by content type."""
    content_type = response.headers.get("content-type", "")
    if not content_type.startswith(JSON_CONTENT_TYPES):
        return dict(parse_qsl(response.text, keep_blank_values=True))

    try:
        body = response.json()
    except ValueError as e:
        raise ProtocolError(f"Invalid token response: {e}", "invalid_response") from e
    if not isinstance(body, dict):
        raise ProtocolError("Invalid token response: expected an object", "invalid_response")
    return body


def check_token_response(body: Mapping[str, Any], status_code: int) -> None:
    """Raise ProtocolError if the token endpoint reported a failure."""
    if body.get("error") is None:
        if status_code == 200:
            return
        raise ProtocolError(GENERIC_ERROR_MESSAGE, GENERIC_ERROR_CODE)

    try:
        error = TokenErrorResponse.model_validate(body)
    except ValidationError:
        raise ProtocolError(GENERIC_ERROR_MESSAGE, GENERIC_ERROR_CODE)
    raise ProtocolError(error.message, error.code)


def parse_access_token(body: Mapping[str, Any], config: EndpointConfig) -> AccessToken:
    token_type = body.get("token_type")
    return AccessToken(
        access_token=body.get("access_token"),
        token_type=DEFAULT_TOKEN_TYPE if token_type is None else token_type,
        query_param=config.access_query_param,
        refresh_token=body.get("refresh_token"),
        params={key: value for key, value in body.items() if key not in ("access_token", "token_type")},
    )


def _form_request(url: str, fields: Mapping[str, Any], headers: Mapping[str, str] | None = None) -> httpx.Request:
    data = {key: value for key, value in fields.items() if value is not None}
    return httpx.Request(
        "POST",
        url,
        data=data,
        headers={"Content-Type": FORM_CONTENT_TYPE, **(headers or {})},
        extensions={"timeout": TOKEN_REQUEST_TIMEOUT.as_dict()},
    )


def _send(request: httpx.Request, client: httpx.Client | None) -> httpx.Response:
    if client is not None:
        return client.send(request, auth=None)
    with httpx.Client() as owned_client:
        return owned_client.send(request)


async def _asend(request: httpx.Request, client: httpx.AsyncClient | None) -> httpx.Response:
    if client is not None:
        return await client.send(request, auth=None)
    async with httpx.AsyncClient() as owned_client:
        return await owned_client.send(request)


class TokenRequestExecutor:
    """
    Performs one token request for an endpoint: grant fields, then client
    authentication, then a single POST to the access token URI.
    """

    def __init__(self, config: EndpointConfig):
        self.config = config

    def build_request(self, params: Mapping[str, Any]) -> httpx.Request:
        require_fields(self.config, "access_token_uri", "grant_type", operation="Token request")

        token_request = TokenRequest(body={"grant_type": self.config.grant_type})
        token_request = prepare_grant(token_request, self.config, params)
        token_request = authenticate_client(token_request, self.config)

        return _form_request(str(self.config.access_token_uri), token_request.body, token_request.headers)

    def handle_response(self, response: httpx.Response) -> AccessToken:
        body = decode_token_response(response)
        try:
            check_token_response(body, response.status_code)
        except ProtocolError as e:
            logger.debug(f"Token request failed: {e.code} (HTTP {response.status_code})")
            raise

        logger.debug("Token exchange successful")
        return parse_access_token(body, self.config)

    def execute(self, params: Mapping[str, Any], client: httpx.Client | None = None) -> AccessToken:
        request = self.build_request(params)
        logger.debug(f"Requesting access token from {request.url} with grant {self.config.grant_type}")
        return self.handle_response(_send(request, client))

    async def aexecute(self, params: Mapping[str, Any], client: httpx.AsyncClient | None = None) -> AccessToken:
        request = self.build_request(params)
        logger.debug(f"Requesting access token from {request.url} with grant {self.config.grant_type}")
        return self.handle_response(await _asend(request, client))


def check_callback(params: Mapping[str, Any], expected: AuthRequest | None = None) -> None:
    """
    Validate the parameters the authorization server redirected back with.

    Raises ProtocolError if the server denied the request, and
    StateMismatchError if the returned state is not the one that was sent.
    """
    error = params.get("error")
    if isinstance(error, str):
        raise ProtocolError(params.get("error_description"), error)

    if expected is not None and expected.state:
        actual = params.get("state")
        if not isinstance(actual, str) or not secrets.compare_digest(actual.encode(), expected.state.encode()):
            raise StateMismatchError(expected.state, actual)


def get_access_token(
    config: EndpointConfig,
    params: Mapping[str, Any] | None = None,
    expected: AuthRequest | None = None,
    *,
    client: httpx.Client | None = None,
) -> AccessToken:
    """Exchange the callback (or resource owner) parameters for an access token.

    Args:
        config: The provider endpoint.
        params: `code` and `state` from the redirect back for authorization_code,
            or `username` and `password` for the password grant.
        expected: The AuthRequest the flow started with; its state is checked
            against `params["state"]`.
        client: Transport to use. A temporary client is used when omitted.
    """
    params = params or {}
    check_callback(params, expected)
    return TokenRequestExecutor(config).execute(params, client)


async def aget_access_token(
    config: EndpointConfig,
    params: Mapping[str, Any] | None = None,
    expected: AuthRequest | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> AccessToken:
    """Async version of `get_access_token`."""
    params = params or {}
    check_callback(params, expected)
    return await TokenRequestExecutor(config).aexecute(params, client)


def build_refresh_request(refresh_token: str, config: EndpointConfig) -> httpx.Request:
    # See https://datatracker.ietf.org/doc/html/rfc6749#section-6
    require_fields(config, "access_token_uri", operation="Token refresh")
    return _form_request(
        str(config.access_token_uri),
        {
            "client_id": config.client_id,
            "client_secret": config.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        },
    )


def handle_refresh_response(
    response: httpx.Response, config: EndpointConfig, raise_on_error: bool = False
) -> AccessToken | None:
    if response.status_code != 200:
        if raise_on_error:
            check_token_response(decode_token_response(response), response.status_code)
        logger.warning(f"Token refresh failed: {response.status_code}")
        return None

    logger.debug("Token refresh successful")
    return parse_access_token(decode_token_response(response), config)


def refresh_access_token(
    refresh_token: str,
    config: EndpointConfig,
    *,
    raise_on_error: bool = False,
    client: httpx.Client | None = None,
) -> AccessToken | None:
    """Exchange a refresh token for a new access token.

    Returns None when the endpoint does not answer 200, unless `raise_on_error`
    is set, in which case the failure is raised as a ProtocolError.
    """
    request = build_refresh_request(refresh_token, config)
    return handle_refresh_response(_send(request, client), config, raise_on_error)


async def arefresh_access_token(
    refresh_token: str,
    config: EndpointConfig,
    *,
    raise_on_error: bool = False,
    client: httpx.AsyncClient | None = None,
) -> AccessToken | None:
    """Async version of `refresh_access_token`."""
    request = build_refresh_request(refresh_token, config)
    return handle_refresh_response(await _asend(request, client), config, raise_on_error)
