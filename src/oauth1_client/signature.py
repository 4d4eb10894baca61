"""HMAC-SHA1 signature base string and signing."""

import base64
import hashlib
import hmac
import secrets
import time
import urllib.parse
from dataclasses import dataclass

import httpx

from .params import Parameters, percent_encode

DEFAULT_PORTS = {"http": 80, "https": 443}


def generate_nonce() -> str:
    """Generate a unique nonce for the request.

    Returns:
        A random 32-character hex string.
    """
    return secrets.token_hex(16)


def base_string_uri(url: httpx.URL | str) -> str:
    """Normalize a request URL for the signature base string.

    Scheme and host are lower-cased, the default port for the scheme is
    dropped, and the query and fragment are removed (RFC 5849 3.4.1.2).

    Args:
        url: The request URL.

    Returns:
        The base string URI.
    """
    parts = urllib.parse.urlsplit(str(url))
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"

    port = parts.port
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"

    return f"{scheme}://{host}{parts.path or '/'}"


def signature_base_string(
    method: str,
    url: httpx.URL | str,
    params: Parameters,
) -> str:
    """Create the OAuth1 signature base string.

    The normalized parameter string is built first, with every key and value
    percent-encoded once. Each of the three segments is then percent-encoded
    again before they are joined with ``&``.

    Args:
        method: HTTP method.
        url: The request URL.
        params: All parameters to include.

    Returns:
        The signature base string.
    """
    param_string = params.encode()

    return "&".join(
        [
            percent_encode(method.upper()),
            percent_encode(base_string_uri(url)),
            percent_encode(param_string),
        ]
    )


def hmac_sha1_signature(consumer_secret: str, token_secret: str, base: str) -> str:
    """Compute the HMAC-SHA1 signature of a base string.

    Args:
        consumer_secret: The consumer's shared secret.
        token_secret: The token secret, empty when no token is held yet.
        base: The signature base string.

    Returns:
        Base64-encoded HMAC-SHA1 digest, not percent-encoded.
    """
    signing_key = f"{consumer_secret}&{token_secret}"

    hashed = hmac.new(
        signing_key.encode("utf-8"),
        base.encode("utf-8"),
        hashlib.sha1,
    )

    return base64.b64encode(hashed.digest()).decode("utf-8")


@dataclass(frozen=True)
class Signer:
    """Per-request nonce and timestamp used to sign one request."""

    nonce: str
    timestamp: int

    @classmethod
    def now(cls) -> "Signer":
        """Create a signer with a fresh nonce and the current Unix time."""
        return cls(nonce=generate_nonce(), timestamp=int(time.time()))

    def base(self, method: str, url: httpx.URL | str, params: Parameters) -> str:
        """Add the nonce and timestamp to params and return the base string."""
        params.add("oauth_nonce", self.nonce)
        params.add("oauth_timestamp", str(self.timestamp))
        return signature_base_string(method, url, params)

    def sign(
        self,
        consumer_secret: str,
        token_secret: str,
        method: str,
        url: httpx.URL | str,
        params: Parameters,
    ) -> str:
        """Sign a request.

        Args:
            consumer_secret: The consumer's shared secret.
            token_secret: The request or access token secret, or "".
            method: HTTP method.
            url: The request URL.
            params: Request parameters; the nonce and timestamp are added.

        Returns:
            The ``oauth_signature`` value.
        """
        return hmac_sha1_signature(
            consumer_secret,
            token_secret,
            self.base(method, url, params),
        )
