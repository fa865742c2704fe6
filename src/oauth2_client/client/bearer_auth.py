"""
Attaches an access token to outbound httpx requests, according to its token type.

See https://datatracker.ietf.org/doc/html/rfc6750#section-2
"""

from typing import Protocol

import httpx

from oauth2_client.errors import ConfigurationError, UnknownTokenTypeError
from oauth2_client.shared.auth import AccessToken


class TokenAttacher(Protocol):
    def __call__(self, request: httpx.Request, token: AccessToken | None, raise_on_failure: bool = False) -> bool:
        """Attach `token` to `request` in place and return whether a token was added."""
        ...


def _attach(request: httpx.Request, token: AccessToken | None, scheme: str) -> bool:
    if token is None or token.access_token is None:
        return False

    if token.query_param:
        request.url = request.url.copy_merge_params({token.query_param: token.access_token})
    else:
        request.headers["Authorization"] = f"{scheme} {token.access_token}"
    return True


def attach_bearer_token(request: httpx.Request, token: AccessToken | None, raise_on_failure: bool = False) -> bool:
    return _attach(request, token, "Bearer")


def attach_draft_10_token(request: httpx.Request, token: AccessToken | None, raise_on_failure: bool = False) -> bool:
    # Pre-RFC providers (Force.com) expect the "OAuth" scheme
    return _attach(request, token, "OAuth")


def attach_unknown_token(request: httpx.Request, token: AccessToken | None, raise_on_failure: bool = False) -> bool:
    if raise_on_failure:
        raise UnknownTokenTypeError(token.token_type if token is not None else None)
    return False


TOKEN_TYPES: dict[str, TokenAttacher] = {
    "bearer": attach_bearer_token,
    "draft-10": attach_draft_10_token,
}


def register_token_type(token_type: str, attacher: TokenAttacher) -> None:
    """Register (or replace) the attacher used for `token_type`, case-insensitively."""
    TOKEN_TYPES[token_type.lower()] = attacher


def add_access_token(request: httpx.Request, token: AccessToken | None, raise_on_failure: bool = False) -> bool:
    token_type = token.token_type if token is not None else None
    attacher = TOKEN_TYPES.get(token_type.lower()) if token_type else None
    if attacher is None:
        attacher = attach_unknown_token
    return attacher(request, token, raise_on_failure)


def with_access_token(uri: str, token: AccessToken) -> str:
    """Return `uri` with the access token merged into its query string."""
    if not token.query_param:
        raise ConfigurationError("Token has no query_param to carry the access token")
    return str(httpx.URL(uri).copy_merge_params({token.query_param: token.access_token}))
