"""Pytest fixtures for OAuth1 client tests."""

import pytest

from oauth1_client.config import Settings
from oauth1_client.models import Endpoint


@pytest.fixture
def endpoint() -> Endpoint:
    """Return the test provider's endpoint URLs."""
    return Endpoint(
        request_token_url="https://provider.example.com/oauth/request_token",
        authorize_url="https://provider.example.com/oauth/authorize",
        access_token_url="https://provider.example.com/oauth/access_token",
    )


@pytest.fixture
def settings(endpoint: Endpoint) -> Settings:
    """Return a Settings object with test credentials.

    Returns:
        Settings object configured with test OAuth1 credentials.
    """
    return Settings(
        consumer_key="test_consumer_key",
        consumer_secret="test_consumer_secret",
        callback_url="https://app.example.com/callback",
        endpoint=endpoint,
    )


@pytest.fixture
def twitter_settings() -> Settings:
    """Return the consumer used by Twitter's sign-in documentation.

    Returns:
        Settings matching the published request/access token examples.
    """
    return Settings(
        consumer_key="cChZNFj6T5R0TigYB9yd1w",
        consumer_secret="L8qq9PZyRg6ieKGEKhZolGC0vJWLw8iEJ88DRdyOg",
        callback_url="http://localhost/sign-in-with-twitter/",
        endpoint=Endpoint(
            request_token_url="https://api.twitter.com/oauth/request_token",
            authorize_url="https://api.twitter.com/oauth/authorize",
            access_token_url="https://api.twitter.com/oauth/access_token",
        ),
    )
