from oauth2_client.errors import ConfigurationError
from oauth2_client.shared.auth import EndpointConfig


def require_fields(config: EndpointConfig, *fields: str, operation: str) -> None:
    """
    Raise ConfigurationError naming every field in `fields` that is unset on
    `config`.
    """
    missing = [name for name in fields if getattr(config, name, None) is None]
    if missing:
        raise ConfigurationError(f"{operation} requires {', '.join(missing)} in the endpoint configuration")
