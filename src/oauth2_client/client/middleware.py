"""
Request middleware that decorates every outbound request with an access token.

The token travels with the request in `request.extensions["oauth2"]` and is
removed before the request reaches the transport.
"""

import logging
from collections.abc import Awaitable, Callable, Generator
from typing import Any

import httpx

from oauth2_client.client.bearer_auth import add_access_token
from oauth2_client.errors import ProtocolError
from oauth2_client.shared.auth import AccessToken

logger = logging.getLogger(__name__)

OAUTH2_EXTENSION = "oauth2"
RAISE_ON_FAILURE_EXTENSION = "raise_on_failure"
# set once a token has been attached, so outer layers leave the request alone
TOKEN_ATTACHED_EXTENSION = "oauth2_token_attached"

SendFunc = Callable[[httpx.Request], httpx.Response]
AsyncSendFunc = Callable[[httpx.Request], Awaitable[httpx.Response]]


def prepare_request(
    request: httpx.Request,
    token: AccessToken | None = None,
    raise_on_failure: bool = False,
) -> httpx.Request:
    """
    Attach the request's token (or `token` when the request carries none) and
    strip the token context from the request. Requests that already had a
    token attached are returned unchanged.
    """
    if request.extensions.get(TOKEN_ATTACHED_EXTENSION):
        return request

    token = request.extensions.get(OAUTH2_EXTENSION, token)
    raise_on_failure = bool(request.extensions.get(RAISE_ON_FAILURE_EXTENSION, raise_on_failure))

    token_added = add_access_token(request, token, raise_on_failure)
    request.extensions = {key: value for key, value in request.extensions.items() if key != OAUTH2_EXTENSION}

    if token_added:
        request.extensions[TOKEN_ATTACHED_EXTENSION] = True
    elif raise_on_failure:
        raise ProtocolError("Missing oauth2 params")
    else:
        logger.debug(f"Sending {request.method} {request.url.host} without an access token")
    return request


def wrap_oauth2(send: SendFunc) -> SendFunc:
    """Wrap a request sender, e.g. `httpx.Client.send`, so every request carries its token."""

    def send_with_token(request: httpx.Request) -> httpx.Response:
        return send(prepare_request(request))

    return send_with_token


def awrap_oauth2(send: AsyncSendFunc) -> AsyncSendFunc:
    """Async version of `wrap_oauth2`, e.g. for `httpx.AsyncClient.send`."""

    async def send_with_token(request: httpx.Request) -> httpx.Response:
        return await send(prepare_request(request))

    return send_with_token


class OAuth2Auth(httpx.Auth):
    """
    httpx authentication that attaches an access token to each request.

    A token set on an individual request's `oauth2` extension takes precedence
    over the one given here.
    """

    def __init__(self, token: AccessToken | None, raise_on_failure: bool = False):
        self.token = token
        self.raise_on_failure = raise_on_failure

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        yield prepare_request(request, self.token, self.raise_on_failure)


def request(
    method: str,
    url: httpx.URL | str,
    *,
    oauth2: AccessToken | None = None,
    raise_on_failure: bool = False,
    client: httpx.Client | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """
    Send a request with `oauth2` attached. Remaining keyword arguments are
    passed to `httpx.Client.build_request`.
    """
    extensions = dict(kwargs.pop("extensions", None) or {})
    extensions[OAUTH2_EXTENSION] = oauth2
    extensions[RAISE_ON_FAILURE_EXTENSION] = raise_on_failure

    if client is not None:
        return wrap_oauth2(client.send)(client.build_request(method, url, extensions=extensions, **kwargs))
    with httpx.Client() as owned_client:
        return wrap_oauth2(owned_client.send)(owned_client.build_request(method, url, extensions=extensions, **kwargs))


def get(url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
    return request("GET", url, **kwargs)


def post(url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
    return request("POST", url, **kwargs)


def put(url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
    return request("PUT", url, **kwargs)


def delete(url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
    return request("DELETE", url, **kwargs)


def head(url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
    return request("HEAD", url, **kwargs)
