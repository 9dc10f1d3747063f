"""Shared fakes for snapfleet tests."""

import asyncio
import json
from collections.abc import Callable
from typing import Any

import pytest

from snapfleet.errors import TransportError


class FakeSleep:
    """Records requested delays and advances a fake clock instead of sleeping."""

    def __init__(self) -> None:
        self.now = 0.0
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        self.now += delay

    def clock(self) -> float:
        return self.now


class FakeTransport:
    """
    In-memory stand-in for RequestTransport.

    POSTs get sequential request ids (``req-1``, ``req-2``, ...) unless a
    ``submit`` handler is given. GETs are answered by ``status`` which gets the
    request id and returns the status body.
    """

    def __init__(
        self,
        status: Callable[[str], Any] | None = None,
        submit: Callable[[int, dict[str, Any]], Any] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        self.cancel_event = cancel_event
        self.calls: list[tuple[str, str]] = []
        self.submissions: list[dict[str, Any]] = []
        self._status = status or (lambda request_id: {"status": "done", "result": []})
        self._submit = submit

    async def __aenter__(self) -> "FakeTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None

    async def request(
        self,
        method: str,
        path: str,
        *,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        self.calls.append((method, path))
        if method == "POST":
            filename, payload_string, content_type = files["payload"]
            submission = {
                **data,
                "filename": filename,
                "content_type": content_type,
                "payload_string": payload_string,
                "payload": json.loads(payload_string),
            }
            self.submissions.append(submission)
            if self._submit is not None:
                return self._submit(len(self.submissions), submission)
            return {"requestId": f"req-{len(self.submissions)}"}
        return self._status(path.rsplit("/", 1)[-1])

    @property
    def polls(self) -> list[str]:
        return [path for method, path in self.calls if method == "GET"]


def failing(method: str = "POST") -> TransportError:
    return TransportError(
        "503 - Service Unavailable",
        method=method,
        url="https://snaps.example.com/api/snap-requests",
        status_code=503,
        attempts=5,
    )


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def snap_payloads() -> list[dict[str, Any]]:
    return [{"file": "Button.js", "name": f"variant-{i}", "html": f"<b>{i}</b>"} for i in range(5)]


@pytest.fixture
def make_transport() -> type[FakeTransport]:
    return FakeTransport


@pytest.fixture
def transport_error() -> Callable[..., TransportError]:
    return failing
