from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    error_description: str | None = None


class OAuth2Error(Exception):
    """
    Base class for all OAuth2 client errors.
    """

    pass


class ConfigurationError(OAuth2Error):
    """Raised when the endpoint configuration lacks a field an operation needs."""

    pass


class ProtocolError(OAuth2Error):
    """
    Raised when the authorization server reports a failure, or when a request
    lacks a usable token and the caller asked for strict behaviour.
    """

    def __init__(self, message: str | None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def error_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=self.code or "unknown",
            error_description=self.message,
        )


class StateMismatchError(ProtocolError):
    """Raised when the state returned on the callback differs from the one sent."""

    def __init__(self, expected: str, actual: str | None):
        super().__init__(
            f"Expected state {expected} but got {actual}",
            "state_mismatch",
        )
        self.expected = expected
        self.actual = actual


class UnknownTokenTypeError(ProtocolError):
    """Raised when no token attacher is registered for a token type."""

    def __init__(self, token_type: str | None):
        super().__init__(f"Unknown token type: {token_type}", "unknown_token_type")
        self.token_type = token_type
