"""Submission of chunks as snap requests."""

import json
from typing import Any

from snapfleet.errors import SubmissionError, TransportError
from snapfleet.jobs.planner import Chunk
from snapfleet.models import JobInputs, TargetConfig
from snapfleet.remote import ContentHasher, RequestTransport
from snapfleet.utils.logging import get_logger

logger = get_logger(__name__)

SNAP_REQUESTS_PATH = "/api/snap-requests"

# Keys written by the submitter itself, dropped from the payload when unset
OMITTED_WHEN_UNSET = frozenset(
    {"maxHeight", "globalCSS", "snapPayloads", "chunk", "staticPackage", "assetsPackage", "pages"}
)


def build_payload(config: TargetConfig, inputs: JobInputs, chunk: Chunk) -> dict[str, Any]:
    """
    Assemble the JSON body of a snap request.

    Unset engine-owned keys are left out; option values are sent as given.
    """
    payload: dict[str, Any] = {
        "viewport": config.viewport,
        "maxHeight": config.max_height,
        **config.options,
        "globalCSS": inputs.global_css,
        "snapPayloads": chunk.items if chunk.kind == "snap-payloads" else None,
        "chunk": {"index": chunk.index, "total": chunk.total} if chunk.is_static else None,
        "staticPackage": inputs.static_package,
        "assetsPackage": inputs.assets_package,
        "pages": chunk.items if chunk.kind == "pages" else None,
    }
    return {
        key: value
        for key, value in payload.items()
        if value is not None or key not in OMITTED_WHEN_UNSET
    }


def serialize_payload(payload: dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


class JobSubmitter:
    """Posts chunks to the rendering service, one request per chunk."""

    def __init__(
        self,
        transport: RequestTransport,
        config: TargetConfig,
        hasher: ContentHasher | None = None,
    ) -> None:
        self.transport = transport
        self.config = config
        self.hasher = hasher or ContentHasher()

    @property
    def job_type(self) -> str:
        return f"browser-{self.config.browser}"

    async def submit(self, chunk: Chunk, inputs: JobInputs) -> str:
        """
        Submit a single chunk.

        Args:
            chunk: Chunk to submit
            inputs: Job inputs shared by all chunks

        Returns:
            Request id assigned by the service
        """
        payload_string = serialize_payload(build_payload(self.config, inputs, chunk))
        # Pages are not idempotent to render, keep the service from de-duplicating them
        payload_hash = self.hasher.digest(payload_string, dedup_exempt=chunk.kind == "pages")

        logger.info(
            "Submitting chunk",
            target=inputs.target_name,
            type=self.job_type,
            chunk=chunk.index,
            total=chunk.total,
            items=len(chunk.items) if chunk.items is not None else None,
            payload_hash=payload_hash,
        )

        try:
            response = await self.transport.request(
                "POST",
                SNAP_REQUESTS_PATH,
                data={
                    "type": self.job_type,
                    "targetName": inputs.target_name,
                    "payloadHash": payload_hash,
                },
                files={
                    "payload": ("payload.json", payload_string, "application/json"),
                },
            )
        except TransportError as e:
            logger.error(
                "Chunk submission failed",
                target=inputs.target_name,
                chunk=chunk.index,
                error=str(e),
            )
            raise SubmissionError(
                f"Failed to submit chunk {chunk.index + 1} of {chunk.total}: {e}",
                chunk_index=chunk.index,
            ) from e

        request_id = response.get("requestId") if isinstance(response, dict) else None
        if not request_id:
            raise SubmissionError(
                f"Snap request response for chunk {chunk.index + 1} of {chunk.total} "
                f"has no requestId: {response!r}",
                chunk_index=chunk.index,
            )

        logger.info("Chunk submitted", chunk=chunk.index, request_id=request_id)
        return str(request_id)
