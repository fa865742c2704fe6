"""
Command line access to an OAuth2 endpoint configured through OAUTH2_* environment
variables.

Usage:
    python -m oauth2_client authorize --state=xyz
    python -m oauth2_client exchange --code=abc --state=xyz --expected-state=xyz
    python -m oauth2_client refresh REFRESH_TOKEN
"""

import logging
import sys
from functools import partial

import anyio
import click

from oauth2_client.client.authorize import make_auth_request
from oauth2_client.client.token import aget_access_token, arefresh_access_token
from oauth2_client.errors import OAuth2Error
from oauth2_client.settings import EndpointSettings
from oauth2_client.shared.auth import AccessToken, AuthRequest


def echo_token(token: AccessToken) -> None:
    click.echo(token.model_dump_json(indent=2, exclude_none=True))


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """Talk to the OAuth2 endpoint described by the OAUTH2_* environment."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj = EndpointSettings().to_endpoint_config()


@cli.command()
@click.option("--state", default=None, help="Opaque value the server must echo back")
@click.pass_obj
def authorize(config, state: str | None) -> None:
    """Print the URL to send the user agent to."""
    try:
        auth_request = make_auth_request(config, state)
    except OAuth2Error as e:
        raise click.ClickException(str(e))
    click.echo(auth_request.uri)


@cli.command()
@click.option("--code", default=None, help="Authorization code from the redirect")
@click.option("--state", default=None, help="State returned on the redirect")
@click.option("--expected-state", default=None, help="State the authorization request was sent with")
@click.option("--username", default=None, help="Resource owner username (password grant)")
@click.option("--password", default=None, help="Resource owner password (password grant)")
@click.pass_obj
def exchange(
    config,
    code: str | None,
    state: str | None,
    expected_state: str | None,
    username: str | None,
    password: str | None,
) -> None:
    """Exchange an authorization code or credentials for an access token."""
    params = {"code": code, "state": state, "username": username, "password": password}
    expected = None
    if expected_state is not None:
        expected = AuthRequest(uri=config.authorization_uri or "", scope=config.scope, state=expected_state)

    try:
        token = anyio.run(partial(aget_access_token, config, params, expected))
    except OAuth2Error as e:
        raise click.ClickException(str(e))
    echo_token(token)


@cli.command()
@click.argument("refresh_token")
@click.pass_obj
def refresh(config, refresh_token: str) -> None:
    """Exchange a refresh token for a new access token."""
    try:
        token = anyio.run(partial(arefresh_access_token, refresh_token, config, raise_on_error=True))
    except OAuth2Error as e:
        raise click.ClickException(str(e))
    if token is not None:
        echo_token(token)


if __name__ == "__main__":
    sys.exit(cli())
