from oauth2_client.client.authorize import make_auth_request
from oauth2_client.client.bearer_auth import (
    TOKEN_TYPES,
    TokenAttacher,
    add_access_token,
    register_token_type,
    with_access_token,
)
from oauth2_client.client.client_auth import authenticate_client
from oauth2_client.client.grants import GRANT_TYPES, GrantStrategy, TokenRequest, register_grant_type
from oauth2_client.client.middleware import (
    OAuth2Auth,
    awrap_oauth2,
    delete,
    get,
    head,
    post,
    put,
    request,
    wrap_oauth2,
)
from oauth2_client.client.token import (
    TokenRequestExecutor,
    aget_access_token,
    arefresh_access_token,
    get_access_token,
    refresh_access_token,
)

__all__ = [
    "GRANT_TYPES",
    "TOKEN_TYPES",
    "GrantStrategy",
    "OAuth2Auth",
    "TokenAttacher",
    "TokenRequest",
    "TokenRequestExecutor",
    "add_access_token",
    "aget_access_token",
    "arefresh_access_token",
    "authenticate_client",
    "awrap_oauth2",
    "delete",
    "get",
    "get_access_token",
    "head",
    "make_auth_request",
    "post",
    "put",
    "refresh_access_token",
    "register_grant_type",
    "register_token_type",
    "request",
    "with_access_token",
    "wrap_oauth2",
]
