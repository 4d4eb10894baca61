"""Tests for parsing the provider's authorization callback."""

import httpx
import pytest

from oauth1_client.callback import parse_authorization_callback
from oauth1_client.exceptions import MalformedQueryError, MissingParameterError

CALLBACK_URL = "https://app.example.com/callback"


def test_parse_authorization_callback_get():
    """Test token and verifier are read from the query string."""
    request = httpx.Request(
        "GET",
        CALLBACK_URL,
        params={"oauth_token": "token", "oauth_verifier": "verifier"},
    )

    callback = parse_authorization_callback(request)

    assert callback.oauth_token == "token"
    assert callback.oauth_verifier == "verifier"


def test_parse_authorization_callback_post():
    """Test token and verifier are read from a form body."""
    request = httpx.Request(
        "POST",
        CALLBACK_URL,
        data={"oauth_token": "token", "oauth_verifier": "verifier"},
    )

    callback = parse_authorization_callback(request)

    assert callback.oauth_token == "token"
    assert callback.oauth_verifier == "verifier"


def test_parse_authorization_callback_form_before_query():
    """Test form values take precedence over query values."""
    request = httpx.Request(
        "POST",
        CALLBACK_URL,
        params={"oauth_token": "from_query", "oauth_verifier": "v"},
        data={"oauth_token": "from_form"},
    )

    assert parse_authorization_callback(request).oauth_token == "from_form"


def test_parse_authorization_callback_get_ignores_body():
    """Test a GET body is not treated as form parameters."""
    request = httpx.Request(
        "GET",
        CALLBACK_URL,
        content=b"oauth_token=t&oauth_verifier=v",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    with pytest.raises(MissingParameterError):
        parse_authorization_callback(request)


@pytest.mark.parametrize(
    "params",
    [
        {"oauth_token": "any_token", "oauth_verifier": ""},
        {"oauth_token": "", "oauth_verifier": "verifier"},
        {"oauth_token": "any_token"},
        {},
    ],
)
def test_parse_authorization_callback_missing_token_or_verifier(params: dict):
    """Test a missing or empty token or verifier is rejected."""
    request = httpx.Request("GET", CALLBACK_URL, params=params)

    with pytest.raises(MissingParameterError) as exc_info:
        parse_authorization_callback(request)

    assert str(exc_info.value) == "Request missing oauth_token or oauth_verifier"


def test_parse_authorization_callback_malformed_form():
    """Test invalid percent-encoding in the form body is rejected."""
    request = httpx.Request(
        "POST",
        CALLBACK_URL,
        content=b"oauth_token=%gh",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    with pytest.raises(MalformedQueryError):
        parse_authorization_callback(request)
