"""OAuth1 request signing."""

from collections.abc import Mapping
from logging import getLogger

import httpx

from .header import format_oauth_header
from .params import prepare_params
from .signature import Signer

logger = getLogger(__name__)


def clone_request(request: httpx.Request) -> httpx.Request:
    """Return a shallow copy of request with its own copy of the headers.

    Setting a header on the clone does not affect the original. The body
    stream and extensions are shared since signing never changes them.
    """
    # copy.copy() would go through Request.__getstate__, which detaches the
    # stream
    return httpx.Request(
        method=request.method,
        url=request.url,
        headers=request.headers.copy(),
        stream=request.stream,
        extensions=dict(request.extensions),
    )


class OAuth1Signer:
    """Signs requests using OAuth1 HMAC-SHA1.

    Supports both two-legged (no token) and three-legged (with a request or
    access token) OAuth1 authentication. The signer holds only the credentials
    it was created with, so one instance can sign concurrent requests.
    """

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        token: str | None = None,
        token_secret: str | None = None,
    ) -> None:
        """Initialize the OAuth1 signer.

        Args:
            consumer_key: The consumer key identifying the application.
            consumer_secret: The consumer's shared secret.
            token: Optional request or access token.
            token_secret: Optional secret belonging to token.
        """
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._token = token
        self._token_secret = token_secret or ""

    @property
    def consumer_key(self) -> str:
        return self._consumer_key

    @property
    def token(self) -> str | None:
        return self._token

    def sign(
        self,
        request: httpx.Request,
        oauth_params: Mapping[str, str] | None = None,
        signer: Signer | None = None,
    ) -> httpx.Request:
        """Return a signed copy of request.

        Args:
            request: The outgoing request. It is not modified; a form body
                must already be readable (``request.read()`` or
                ``await request.aread()``).
            oauth_params: Extra protocol parameters such as ``oauth_callback``
                or ``oauth_verifier``.
            signer: Nonce and timestamp to sign with. A fresh one is drawn
                when omitted.

        Returns:
            A clone of request carrying the ``Authorization`` header.
        """
        params = prepare_params(request, self._consumer_key)

        # Include oauth_token for 3-legged authentication
        if self._token:
            params.add("oauth_token", self._token)

        for key, value in (oauth_params or {}).items():
            params.add(key, value)

        signer = signer or Signer.now()
        signature = signer.sign(
            self._consumer_secret,
            self._token_secret,
            request.method,
            request.url,
            params,
        )
        params.add("oauth_signature", signature)

        signed = clone_request(request)
        signed.headers["Authorization"] = format_oauth_header(params.protocol_params())

        logger.debug(
            "Signed %s %s (three-legged=%s)",
            request.method,
            request.url.path,
            bool(self._token),
        )
        return signed
