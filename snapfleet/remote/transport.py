"""HTTP transport for the remote rendering service."""

import asyncio
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any

import httpx

from snapfleet.config import settings
from snapfleet.errors import OperationCancelled, TransportError
from snapfleet.utils.logging import get_logger

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def raise_if_cancelled(cancel_event: asyncio.Event | None) -> None:
    """Raise OperationCancelled when the caller has set the event."""
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelled("Operation cancelled by caller")


def is_retryable_status(status_code: int) -> bool:
    """
    Whether a failed HTTP status is worth another attempt.

    Server errors (5xx) and rate limiting (429) are retried. Every other
    client error fails fast.
    """
    return status_code >= 500 or status_code == 429


class RequestTransport:
    """
    Authenticated HTTP calls with bounded retry.

    Network errors, 5xx and 429 responses are retried up to ``retry_count``
    attempts in total with a linear backoff. Other 4xx responses and
    non-JSON bodies raise TransportError immediately.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        *,
        retry_count: int | None = None,
        retry_delay: float | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        self.endpoint = (endpoint or settings.endpoint).rstrip("/")
        self.retry_count = max(1, retry_count if retry_count is not None else settings.retry_count)
        self.retry_delay = retry_delay if retry_delay is not None else settings.retry_delay_seconds
        self.cancel_event = cancel_event
        self._sleep = sleep
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            auth=httpx.BasicAuth(
                api_key if api_key is not None else settings.api_key,
                api_secret if api_secret is not None else settings.api_secret,
            ),
            timeout=timeout if timeout is not None else settings.request_timeout_seconds,
            transport=http_transport,
        )

    async def __aenter__(self) -> "RequestTransport":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    def url_for(self, path: str) -> str:
        return f"{self.endpoint}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send a request and return the parsed JSON body.

        Args:
            method: HTTP method
            path: Path relative to the service endpoint
            data: Form fields
            files: Multipart file fields

        Returns:
            Parsed JSON response
        """
        url = self.url_for(path)
        last_error: TransportError | None = None

        for attempt in range(1, self.retry_count + 1):
            raise_if_cancelled(self.cancel_event)

            try:
                response = await self._client.request(method, url, data=data, files=files)
            except httpx.TransportError as e:
                last_error = TransportError(
                    f"{method} {url} failed: {e}",
                    method=method,
                    url=url,
                    attempts=attempt,
                )
                last_error.__cause__ = e
            else:
                if response.is_success:
                    try:
                        return response.json()
                    except ValueError as e:
                        raise TransportError(
                            f"{method} {url} returned a non-JSON body",
                            method=method,
                            url=url,
                            status_code=response.status_code,
                            attempts=attempt,
                        ) from e

                error = TransportError(
                    f"{method} {url} failed: {response.status_code} - {response.text}",
                    method=method,
                    url=url,
                    status_code=response.status_code,
                    attempts=attempt,
                )
                if not is_retryable_status(response.status_code):
                    logger.error(
                        "Request rejected",
                        method=method,
                        url=url,
                        status=response.status_code,
                    )
                    raise error
                last_error = error

            if attempt < self.retry_count:
                delay = self.retry_delay * attempt
                logger.warning(
                    "Request failed, retrying",
                    method=method,
                    url=url,
                    attempt=attempt,
                    delay=delay,
                    error=str(last_error),
                )
                raise_if_cancelled(self.cancel_event)
                await self._sleep(delay)

        if last_error is None:
            raise TransportError(
                f"{method} {url} was not attempted",
                method=method,
                url=url,
                attempts=0,
            )
        logger.error(
            "Request failed, giving up",
            method=method,
            url=url,
            attempts=self.retry_count,
            error=str(last_error),
        )
        raise last_error
