"""Remote browser target: chunk, submit and collect a workload."""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

from snapfleet.errors import SubmissionError
from snapfleet.jobs.planner import ChunkPlanner
from snapfleet.jobs.poller import ResultPoller
from snapfleet.jobs.submitter import JobSubmitter
from snapfleet.models import JobInputs, SnapResult, TargetConfig
from snapfleet.remote import ContentHasher, RequestTransport
from snapfleet.utils.logging import get_logger

logger = get_logger(__name__)


async def gather_results(polls: list["asyncio.Task[list[SnapResult]]"]) -> list[SnapResult]:
    """
    Wait for every poll and concatenate results in the order of ``polls``.

    If one poll fails the others are cancelled before the error propagates.
    """
    try:
        per_request = await asyncio.gather(*polls)
    except BaseException:
        await cancel_all(polls)
        raise
    return [result for results in per_request for result in results]


async def cancel_all(tasks: list["asyncio.Task[Any]"]) -> None:
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


class RemoteBrowserTarget:
    """
    A browser + viewport combination rendered by the remote service.

    Chunks are submitted one at a time to keep load on the service down.
    Polling for a chunk starts as soon as it has been submitted, so polls run
    concurrently with each other and with later submissions.
    """

    def __init__(
        self,
        browser_name: str,
        config: Mapping[str, Any],
        *,
        hasher: ContentHasher | None = None,
    ) -> None:
        """
        Validate the target configuration.

        Args:
            browser_name: Browser to render in (e.g. "chrome", "edge")
            config: ``viewport``, optional ``chunks`` and ``maxHeight``;
                anything else is passed to the browser as an option

        Raises:
            InvalidViewport: viewport is not ``<width>x<height>``
            ViewportTooNarrow: viewport is too narrow for the browser
            ConflictingTargetOption: an option shadows a payload key
        """
        self.config = TargetConfig.from_user_config(config, browser=browser_name)
        self.hasher = hasher or ContentHasher()

    @property
    def browser_name(self) -> str:
        return self.config.browser

    async def execute(
        self,
        inputs: JobInputs,
        *,
        transport: RequestTransport,
        poller: ResultPoller | None = None,
    ) -> list[str] | list[SnapResult]:
        """
        Render a workload on this target.

        Args:
            inputs: Workload, CSS and package references
            transport: Transport to the rendering service
            poller: Poller to wait with, defaults to one on ``transport``

        Returns:
            Request ids in submission order when ``inputs.async_results`` is
            set, otherwise the results of all chunks in submission order
        """
        chunks = ChunkPlanner(self.config.chunks).plan(inputs.workload)
        submitter = JobSubmitter(transport, self.config, self.hasher)
        poller = poller or ResultPoller(transport, cancel_event=transport.cancel_event)

        logger.info(
            "Executing target",
            target=inputs.target_name,
            browser=self.browser_name,
            viewport=self.config.viewport,
            workload=inputs.workload.kind,
            chunks=len(chunks),
            async_results=inputs.async_results,
        )

        request_ids: list[str] = []
        polls: list[asyncio.Task[list[SnapResult]]] = []
        try:
            for chunk in chunks:
                try:
                    request_id = await submitter.submit(chunk, inputs)
                except SubmissionError as e:
                    e.submitted_request_ids = list(request_ids)
                    raise
                request_ids.append(request_id)
                if not inputs.async_results:
                    polls.append(asyncio.create_task(poller.wait_for(request_id)))
        except BaseException:
            await cancel_all(polls)
            raise

        if inputs.async_results:
            return request_ids

        results = await gather_results(polls)
        logger.info("Target done", target=inputs.target_name, results=len(results))
        return results

    async def collect(
        self,
        request_ids: Iterable[str],
        *,
        transport: RequestTransport,
        poller: ResultPoller | None = None,
    ) -> list[SnapResult]:
        """Wait for request ids returned by an earlier async ``execute``."""
        poller = poller or ResultPoller(transport, cancel_event=transport.cancel_event)
        return await gather_results(
            [asyncio.create_task(poller.wait_for(request_id)) for request_id in request_ids]
        )
