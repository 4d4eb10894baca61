"""Custom exceptions for the OAuth1 client."""


class OAuth1Error(Exception):
    """Base exception for OAuth1 errors."""

    pass


class ConfigurationError(OAuth1Error):
    """Raised when configuration is invalid or missing."""

    pass


class TransportError(OAuth1Error):
    """Raised when a credential request cannot be sent or answered."""

    pass


class UnexpectedStatusError(OAuth1Error):
    """Raised when a credential endpoint answers with a status other than 200/201."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(OAuth1Error):
    """Raised when a credential response body is not form-encoded."""

    pass


class MissingCredentialsError(OAuth1Error):
    """Raised when a credential response lacks oauth_token or oauth_token_secret."""

    pass


class CallbackNotConfirmedError(OAuth1Error):
    """Raised when the provider does not confirm the callback URL."""

    pass


class MissingParameterError(OAuth1Error):
    """Raised when an authorization callback lacks oauth_token or oauth_verifier."""

    pass


class FormatError(OAuth1Error):
    """Raised when an Authorization header is not a valid OAuth header."""

    pass


class MalformedQueryError(OAuth1Error):
    """Raised when a query string or form body has invalid percent-encoding."""

    pass


class BodyReadError(OAuth1Error):
    """Raised when a request body cannot be read for signing."""

    pass
