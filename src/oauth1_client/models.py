"""
Pydantic models for OAuth1 endpoints and credentials.
"""

from pydantic import BaseModel, ConfigDict


class Endpoint(BaseModel):
    """The provider's temporary-credential, authorization and token URLs."""

    model_config = ConfigDict(frozen=True)

    request_token_url: str = ""
    authorize_url: str = ""
    access_token_url: str = ""


class TokenCredentials(BaseModel):
    """An OAuth token and its shared secret."""

    model_config = ConfigDict(frozen=True)

    oauth_token: str
    oauth_token_secret: str


class RequestToken(TokenCredentials):
    """Temporary credentials used during the authorization step."""

    pass


class AccessToken(TokenCredentials):
    """Token credentials for signing resource requests."""

    pass


class AuthorizationCallback(BaseModel):
    """Token and verifier returned by the provider's redirect."""

    model_config = ConfigDict(frozen=True)

    oauth_token: str
    oauth_verifier: str
