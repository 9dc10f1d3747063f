"""Polling snap requests until they are done."""

import asyncio
import time
from collections.abc import Callable

from pydantic import ValidationError

from snapfleet.config import settings
from snapfleet.errors import PollError, PollTimeout
from snapfleet.jobs.submitter import SNAP_REQUESTS_PATH
from snapfleet.models import SnapRequestStatus, SnapResult
from snapfleet.remote import RequestTransport, raise_if_cancelled
from snapfleet.remote.transport import Sleep
from snapfleet.utils.logging import get_logger

logger = get_logger(__name__)


class ResultPoller:
    """
    Waits for snap requests to finish.

    Polls the status endpoint every ``poll_interval`` seconds. Without a
    ``timeout`` a request that never finishes is polled forever.
    """

    def __init__(
        self,
        transport: RequestTransport,
        *,
        poll_interval: float | None = None,
        timeout: float | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        self.transport = transport
        self.poll_interval = (
            poll_interval if poll_interval is not None else settings.poll_interval_seconds
        )
        self.timeout = timeout if timeout is not None else settings.poll_timeout_seconds
        self.cancel_event = cancel_event
        self._sleep = sleep
        self._clock = clock

    async def wait_for(self, request_id: str) -> list[SnapResult]:
        """
        Poll a snap request until it is done.

        Args:
            request_id: Id returned when the chunk was submitted

        Returns:
            Result items tagged with ``request_id``
        """
        started = self._clock()
        polls = 0

        while True:
            raise_if_cancelled(self.cancel_event)
            response = await self.transport.request("GET", f"{SNAP_REQUESTS_PATH}/{request_id}")
            try:
                status = SnapRequestStatus.model_validate(response)
            except ValidationError as e:
                raise PollError(
                    f"Unexpected status response for snap request {request_id}: {response!r}",
                    request_id=request_id,
                ) from e
            polls += 1

            if status.is_done:
                results = [SnapResult.tagged(item, request_id) for item in status.result or []]
                logger.info(
                    "Snap request done",
                    request_id=request_id,
                    polls=polls,
                    results=len(results),
                )
                return results

            elapsed = self._clock() - started
            if self.timeout is not None and elapsed + self.poll_interval > self.timeout:
                logger.error("Snap request timed out", request_id=request_id, timeout=self.timeout)
                raise PollTimeout(
                    f"Snap request {request_id} not done after {self.timeout}s",
                    request_id=request_id,
                )

            logger.debug("Snap request pending", request_id=request_id, status=status.status)
            raise_if_cancelled(self.cancel_event)
            await self._sleep(self.poll_interval)
