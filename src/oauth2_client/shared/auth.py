from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Some providers (Force.com among them) omit token_type entirely. Their tokens
# follow the pre-RFC "draft-10" convention of an "OAuth" header scheme.
DEFAULT_TOKEN_TYPE = "draft-10"


class EndpointConfig(BaseModel):
    """
    Description of one OAuth2 provider endpoint and this client's registration
    with it.

    Every field is optional at construction time; each operation checks the
    fields it needs before touching the network.
    """

    client_id: str | None = None
    client_secret: str | None = None
    grant_type: str | None = None
    authorization_uri: str | None = None
    access_token_uri: str | None = None
    redirect_uri: str | None = None
    scope: Sequence[str] | None = None
    # name of the query parameter used to carry the token, instead of a header
    access_query_param: str | None = None
    # send client credentials with HTTP Basic instead of in the request body
    authorization_header: bool = False

    # authorization request extras understood by some providers (Google)
    access_type: str | None = None
    prompt: Sequence[str] | None = None
    include_granted_scopes: bool | None = None
    login_hint: str | None = None

    model_config = ConfigDict(frozen=True)


class AuthRequest(BaseModel):
    """The redirect to send the user agent to, plus what it was built with."""

    uri: str
    scope: Sequence[str] | None = None
    state: str | None = None

    model_config = ConfigDict(frozen=True)


class AccessToken(BaseModel):
    """
    An access token as returned by the token endpoint.

    `params` holds every other field the provider returned, including
    `refresh_token` and `expires_in` when present.
    """

    access_token: str | None = None
    token_type: str | None = None
    query_param: str | None = None
    refresh_token: str | None = None
    params: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class ProviderError(BaseModel):
    """
    Structured error object used by Facebook-style providers:
    {"error": {"type": ..., "message": ...}}
    """

    type: str | None = None
    message: str | None = None

    model_config = ConfigDict(extra="allow")


class TokenErrorResponse(BaseModel):
    """
    See https://datatracker.ietf.org/doc/html/rfc6749#section-5.2

    `error` is either the RFC error code string or a provider-specific object.
    """

    error: str | ProviderError
    error_description: str | None = None

    model_config = ConfigDict(extra="allow")

    @property
    def code(self) -> str | None:
        if isinstance(self.error, ProviderError):
            return self.error.type
        return self.error

    @property
    def message(self) -> str | None:
        if isinstance(self.error, ProviderError):
            return self.error.message
        return self.error_description
