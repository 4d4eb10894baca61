"""OAuth 1.0a 3-legged flow (RFC 5849 section 2)."""

from logging import getLogger
from typing import Any

import httpx

from .auth import OAuth1Signer
from .config import Settings
from .exceptions import (
    CallbackNotConfirmedError,
    ConfigurationError,
    MalformedQueryError,
    MalformedResponseError,
    MissingCredentialsError,
    TransportError,
    UnexpectedStatusError,
)
from .models import AccessToken, RequestToken
from .params import Parameters, parse_form
from .transport import (
    TransportContext,
    TransportResolver,
    context_transport,
    new_client,
)

logger = getLogger(__name__)


class CredentialFlow:
    """Runs the OAuth 1.0a 3-legged authentication flow.

    This implements the three-step OAuth handshake:
    1. Get a request token (temporary credentials) from the provider
    2. Generate an authorization URL for the user to visit
    3. Exchange the verifier for an access token (token credentials)

    Tokens are returned to the caller and never kept here, so a single
    instance can serve any number of concurrent flows.
    """

    def __init__(
        self,
        settings: Settings,
        context: TransportContext | None = None,
        resolver: TransportResolver = context_transport,
    ) -> None:
        """Initialize the credential flow.

        Args:
            settings: Consumer credentials, callback URL and endpoints.
            context: Context passed to resolver to pick the transport. A
                transport injected through it stays open when the flow closes.
            resolver: Function returning the transport for context.
        """
        self._settings = settings
        self._context = context
        self._resolver = resolver
        self._client = httpx.AsyncClient(transport=resolver(context))

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "CredentialFlow":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit the async context manager."""
        await self.close()

    async def request_token(self) -> RequestToken:
        """Step 1: Get a request token from the provider.

        Returns:
            Request token for the authorization step.

        Raises:
            TransportError: If the request cannot be sent.
            UnexpectedStatusError: If the provider answers with another
                status than 200 or 201.
            MalformedResponseError: If the body is not form-encoded.
            MissingCredentialsError: If the token or secret is missing.
            CallbackNotConfirmedError: If oauth_callback_confirmed is not true.
        """
        url = self._settings.endpoint.request_token_url
        logger.debug("Requesting temporary credentials from %s", url)

        # Consumer credentials only, the token secret is empty
        signer = OAuth1Signer(
            self._settings.consumer_key,
            self._settings.consumer_secret,
        )
        request = signer.sign(
            self._build_request(url),
            oauth_params={"oauth_callback": self._settings.callback_url},
        )

        values = await self._exchange(request, "request token")

        if values.get("oauth_callback_confirmed") != "true":
            logger.warning("Provider at %s did not confirm the callback", url)
            raise CallbackNotConfirmedError("oauth_callback_confirmed was not true")

        return RequestToken(
            oauth_token=values.get("oauth_token"),
            oauth_token_secret=values.get("oauth_token_secret"),
        )

    def authorization_url(self, request_token: RequestToken | str) -> str:
        """Step 2: Generate the authorization URL for the user.

        Args:
            request_token: The request token from step 1, or its token string.

        Returns:
            URL for the user to visit to authorize the application.

        Raises:
            ConfigurationError: If the configured authorize URL is invalid.
        """
        if isinstance(request_token, RequestToken):
            request_token = request_token.oauth_token

        try:
            url = httpx.URL(self._settings.endpoint.authorize_url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid authorize URL: {e}") from e

        return str(url.copy_add_param("oauth_token", request_token))

    async def access_token(
        self,
        request_token: str,
        request_secret: str,
        verifier: str,
    ) -> AccessToken:
        """Step 3: Exchange the verifier for an access token.

        Args:
            request_token: The request token from step 1.
            request_secret: The request token secret from step 1.
            verifier: The verification code returned after authorization.

        Returns:
            Access token for authenticated API calls.

        Raises:
            TransportError: If the request cannot be sent.
            UnexpectedStatusError: If the provider answers with another
                status than 200 or 201.
            MalformedResponseError: If the body is not form-encoded.
            MissingCredentialsError: If the token or secret is missing.
        """
        url = self._settings.endpoint.access_token_url
        logger.debug("Exchanging verifier for token credentials at %s", url)

        signer = OAuth1Signer(
            self._settings.consumer_key,
            self._settings.consumer_secret,
            token=request_token,
            token_secret=request_secret,
        )
        request = signer.sign(
            self._build_request(url),
            oauth_params={"oauth_verifier": verifier},
        )

        values = await self._exchange(request, "access token")

        return AccessToken(
            oauth_token=values.get("oauth_token"),
            oauth_token_secret=values.get("oauth_token_secret"),
        )

    def client(self, access_token: str, access_secret: str) -> httpx.AsyncClient:
        """Create an httpx client that signs requests with the access token.

        Args:
            access_token: The access token from step 3.
            access_secret: The access token secret from step 3.

        Returns:
            A signing ``httpx.AsyncClient``; the caller closes it.
        """
        return new_client(
            self._settings.consumer_key,
            self._settings.consumer_secret,
            access_token,
            access_secret,
            context=self._context,
            resolver=self._resolver,
        )

    @staticmethod
    def _build_request(url: str) -> httpx.Request:
        """Build an empty POST to a credential endpoint."""
        try:
            return httpx.Request("POST", url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid credential endpoint URL: {e}") from e

    async def _exchange(self, request: httpx.Request, step: str) -> Parameters:
        """Send a signed credential request and parse the form response.

        Args:
            request: The signed request.
            step: Name of the credentials being requested, for messages.

        Returns:
            The response parameters, with oauth_token and oauth_token_secret
            known to be present.
        """
        try:
            response = await self._client.send(request)
        except httpx.RequestError as e:
            raise TransportError(f"Failed to get {step}: {str(e)}") from e

        if response.status_code not in (httpx.codes.OK, httpx.codes.CREATED):
            logger.warning("Failed to get %s: HTTP %d", step, response.status_code)
            raise UnexpectedStatusError(
                f"Server returned unexpected status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            values = parse_form(response.text)
        except MalformedQueryError as e:
            raise MalformedResponseError(
                f"Invalid response from {step} endpoint: {e}"
            ) from e

        # Only the credentials are validated; oauth_version and the like
        # are accepted as sent
        if not values.get("oauth_token") or not values.get("oauth_token_secret"):
            logger.warning("Response for %s is missing credentials", step)
            raise MissingCredentialsError(
                "Response missing oauth_token or oauth_token_secret"
            )

        return values
