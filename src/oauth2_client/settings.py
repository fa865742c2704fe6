from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from oauth2_client.shared.auth import EndpointConfig


class EndpointSettings(BaseSettings):
    """
    Endpoint configuration read from the environment.

    Every field maps to the EndpointConfig field of the same name, e.g.
    OAUTH2_CLIENT_ID, OAUTH2_ACCESS_TOKEN_URI or OAUTH2_SCOPE='["read", "write"]'.
    """

    model_config = SettingsConfigDict(env_prefix="OAUTH2_")

    client_id: str | None = None
    client_secret: str | None = None
    grant_type: str | None = "authorization_code"
    authorization_uri: str | None = None
    access_token_uri: str | None = None
    redirect_uri: str | None = None
    scope: list[str] | None = None
    access_query_param: str | None = None
    authorization_header: bool = Field(
        False,
        description="Send client credentials with HTTP Basic instead of in the request body",
    )

    access_type: str | None = None
    prompt: list[str] | None = None
    include_granted_scopes: bool | None = None
    login_hint: str | None = None

    def to_endpoint_config(self) -> EndpointConfig:
        return EndpointConfig(**self.model_dump())
