"""OAuth1 parameter collection and percent-encoding."""

import re
import urllib.parse
from collections.abc import Iterable, Iterator
from logging import getLogger

import httpx

from .exceptions import BodyReadError, MalformedQueryError

logger = getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# A "%" not followed by two hex digits
_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def percent_encode(value: str) -> str:
    """Percent-encode a value according to RFC 3986.

    Only unreserved characters (``A-Z a-z 0-9 - . _ ~``) are left as is, so a
    space becomes ``%20`` and never ``+``.

    Args:
        value: The value to encode.

    Returns:
        Percent-encoded string.
    """
    return urllib.parse.quote(str(value), safe="")


class Parameters:
    """Ordered multi-map of request and protocol parameters.

    Values are stored decoded; they are percent-encoded once, when the
    normalized parameter string or the Authorization header is rendered.
    """

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        self._values: dict[str, list[str]] = {}
        for key, value in items:
            self.add(key, value)

    def add(self, key: str, value: str) -> None:
        """Append a value for key, keeping any existing values."""
        self._values.setdefault(key, []).append(str(value))

    def get(self, key: str, default: str = "") -> str:
        """Return the first value for key, or default."""
        values = self._values.get(key)
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        return list(self._values.get(key, []))

    def multi_items(self) -> list[tuple[str, str]]:
        """Return every (key, value) pair in insertion order."""
        return [
            (key, value) for key, values in self._values.items() for value in values
        ]

    def encoded_pairs(self) -> list[tuple[str, str]]:
        """Return the percent-encoded pairs sorted by key, then by value."""
        return sorted(
            (percent_encode(key), percent_encode(value))
            for key, value in self.multi_items()
        )

    def encode(self) -> str:
        """Render the normalized parameter string (RFC 5849 3.4.1.3.2)."""
        return "&".join(f"{key}={value}" for key, value in self.encoded_pairs())

    def protocol_params(self) -> "Parameters":
        """Return only the ``oauth_`` protocol parameters."""
        return Parameters(
            (key, value)
            for key, value in self.multi_items()
            if key.startswith("oauth_")
        )

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Parameters({self.multi_items()!r})"


def parse_form(text: str) -> Parameters:
    """Parse a query string or form-encoded body.

    Args:
        text: The ``application/x-www-form-urlencoded`` text.

    Returns:
        The decoded parameters, blank values included.

    Raises:
        MalformedQueryError: If the text contains an invalid percent escape
            or escaped bytes that are not valid UTF-8.
    """
    match = _INVALID_ESCAPE.search(text)
    if match:
        escape = text[match.start() : match.start() + 3]
        raise MalformedQueryError(f"invalid URL escape {escape!r}")

    try:
        pairs = urllib.parse.parse_qsl(text, keep_blank_values=True, errors="strict")
    except UnicodeDecodeError as e:
        raise MalformedQueryError(f"escaped value is not valid UTF-8: {e}") from e

    return Parameters(pairs)


def is_form_encoded(request: httpx.Request) -> bool:
    """Check whether the request declares a form-encoded body."""
    content_type = request.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() == FORM_CONTENT_TYPE


def read_form_body(request: httpx.Request) -> Parameters:
    """Parse a form-encoded request body without consuming it.

    httpx keeps the bytes it has read on the request, so the body can still be
    sent after this call.

    Raises:
        BodyReadError: If the body stream cannot be read.
        MalformedQueryError: If the body is not valid form data.
    """
    try:
        body = request.read()
    except (httpx.StreamError, OSError) as e:
        raise BodyReadError(f"Failed to read request body: {e}") from e

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedQueryError(f"Form body is not valid UTF-8: {e}") from e

    return parse_form(text)


def prepare_params(request: httpx.Request, consumer_key: str) -> Parameters:
    """Collect the parameters that take part in the signature.

    The form body (when the request declares one) and the URL query are
    combined with the fixed protocol parameters. ``oauth_token``,
    ``oauth_callback``, ``oauth_verifier``, ``oauth_nonce`` and
    ``oauth_timestamp`` are left for the caller to add.

    Args:
        request: The outgoing request.
        consumer_key: The consumer key identifying the application.

    Returns:
        The parameter set for this request.
    """
    params = Parameters()

    if is_form_encoded(request):
        params = read_form_body(request)

    query = parse_form(request.url.query.decode("ascii"))
    for key, value in query.multi_items():
        params.add(key, value)

    params.add("oauth_consumer_key", consumer_key)
    params.add("oauth_signature_method", "HMAC-SHA1")
    params.add("oauth_version", "1.0")

    logger.debug(
        "Prepared %d parameter names for %s %s",
        len(params),
        request.method,
        request.url.path,
    )
    return params
