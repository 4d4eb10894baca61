"""Authorization header serialization."""

import urllib.parse

from .exceptions import FormatError
from .params import Parameters

SCHEME = "OAuth"


def format_oauth_header(params: Parameters) -> str:
    """Render parameters as an OAuth Authorization header value.

    Pairs appear in the same order as in the normalized parameter string and
    values are percent-encoded the same way, so the provider sees exactly the
    values that were signed.

    Args:
        params: The signed protocol parameters.

    Returns:
        A header value such as ``OAuth oauth_consumer_key="...", ...``.
    """
    pairs = ", ".join(f'{key}="{value}"' for key, value in params.encoded_pairs())
    return f"{SCHEME} {pairs}"


def parse_oauth_header(value: str) -> dict[str, str]:
    """Parse an OAuth Authorization header value.

    Args:
        value: The header value.

    Returns:
        Mapping of parameter name to decoded value.

    Raises:
        FormatError: If the value does not use the OAuth scheme or a
            parameter is not a single ``key="value"`` pair.
    """
    if value != SCHEME and not value.startswith(f"{SCHEME} "):
        raise FormatError(
            f'Expected Authorization header to start with "{SCHEME}", '
            f"got {value[:6]!r}"
        )

    params: dict[str, str] = {}
    rest = value[len(SCHEME) + 1 :]
    if not rest:
        return params

    for pair in rest.split(", "):
        parts = pair.split("=")
        if len(parts) != 2:
            raise FormatError(f"Error parsing OAuth parameter {pair!r}")
        key, raw = parts
        params[urllib.parse.unquote(key)] = urllib.parse.unquote(raw.strip('"'))

    return params
