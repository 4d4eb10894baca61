"""Signing transport for httpx clients."""

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import Protocol

import httpx

from .auth import OAuth1Signer
from .params import is_form_encoded

logger = getLogger(__name__)


class RequestSender(Protocol):
    """Anything that can send a request and return its response.

    This is the interface of ``httpx.AsyncBaseTransport``; a transport only
    has to provide ``handle_async_request`` to be wrapped or injected.
    """

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response: ...


@dataclass(frozen=True)
class TransportContext:
    """Explicit context used to pick the transport that sends requests.

    Attributes:
        transport: Sender to use instead of the default transport. It stays
            owned by the caller and is never closed by this package.
    """

    transport: RequestSender | None = None


TransportResolver = Callable[[TransportContext | None], httpx.AsyncBaseTransport]


class BorrowedTransport(httpx.AsyncBaseTransport):
    """Transport that forwards to a sender owned by someone else.

    Closing it leaves the wrapped sender open, so the same sender can back a
    credential flow and any number of signing clients.
    """

    def __init__(self, sender: RequestSender) -> None:
        self.sender = sender

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self.sender.handle_async_request(request)

    async def aclose(self) -> None:
        # The owner closes the sender
        logger.debug("Leaving borrowed transport %r open", self.sender)


def context_transport(context: TransportContext | None) -> httpx.AsyncBaseTransport:
    """Return the context's transport, or a new default httpx transport.

    A transport taken from the context is wrapped in ``BorrowedTransport``,
    so only transports created here are closed with the client using them.
    """
    if context is not None and context.transport is not None:
        return BorrowedTransport(context.transport)
    return httpx.AsyncHTTPTransport()


class SigningTransport(httpx.AsyncBaseTransport):
    """Transport that adds an OAuth1 Authorization header to every request.

    It wraps another sender: each request is signed on a copy and the copy
    is handed to the base sender.
    """

    def __init__(
        self,
        signer: OAuth1Signer,
        base: RequestSender | None = None,
    ) -> None:
        """Initialize the signing transport.

        Args:
            signer: Signer holding the consumer and access credentials.
            base: Sender for the signed requests. Defaults to
                ``httpx.AsyncHTTPTransport()``.
        """
        self._signer = signer
        self.base = base if base is not None else httpx.AsyncHTTPTransport()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        # Only form parameters are signed; other bodies are streamed untouched
        if is_form_encoded(request):
            await request.aread()
        signed = self._signer.sign(request)
        return await self.base.handle_async_request(signed)

    async def aclose(self) -> None:
        """Close the base sender when it is an httpx transport."""
        if isinstance(self.base, httpx.AsyncBaseTransport):
            await self.base.aclose()


def new_client(
    consumer_key: str,
    consumer_secret: str,
    access_token: str,
    access_secret: str,
    context: TransportContext | None = None,
    resolver: TransportResolver = context_transport,
) -> httpx.AsyncClient:
    """Create an httpx client that signs every request with the given tokens.

    Args:
        consumer_key: The consumer key identifying the application.
        consumer_secret: The consumer's shared secret.
        access_token: The access token.
        access_secret: The access token secret.
        context: Context passed to resolver to pick the base transport.
        resolver: Function returning the base transport for context.

    Returns:
        An ``httpx.AsyncClient`` using a ``SigningTransport``.
    """
    signer = OAuth1Signer(
        consumer_key,
        consumer_secret,
        token=access_token,
        token_secret=access_secret,
    )
    logger.debug("Creating signing client for consumer %s", consumer_key)
    return httpx.AsyncClient(
        transport=SigningTransport(signer, base=resolver(context)),
    )
