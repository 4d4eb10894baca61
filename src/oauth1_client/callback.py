"""Parsing of the provider's redirect back to the application."""

import httpx

from .exceptions import MissingParameterError
from .models import AuthorizationCallback
from .params import Parameters, is_form_encoded, parse_form, read_form_body

FORM_METHODS = ("POST", "PUT", "PATCH")


def parse_authorization_callback(request: httpx.Request) -> AuthorizationCallback:
    """Extract the request token and verifier from an authorization callback.

    The provider may redirect with a GET query string or submit a POST form;
    both are read, form values first.

    Args:
        request: The inbound callback request.

    Returns:
        The request token and verifier.

    Raises:
        MissingParameterError: If oauth_token or oauth_verifier is missing
            or empty.
        MalformedQueryError: If the query or form has invalid encoding.
    """
    params = Parameters()
    if request.method in FORM_METHODS and is_form_encoded(request):
        params = read_form_body(request)

    for key, value in parse_form(request.url.query.decode("ascii")).multi_items():
        params.add(key, value)

    oauth_token = params.get("oauth_token")
    oauth_verifier = params.get("oauth_verifier")
    if not oauth_token or not oauth_verifier:
        raise MissingParameterError("Request missing oauth_token or oauth_verifier")

    return AuthorizationCallback(
        oauth_token=oauth_token,
        oauth_verifier=oauth_verifier,
    )
