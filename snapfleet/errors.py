"""Error types raised by snapfleet."""


class SnapfleetError(Exception):
    """Base class for all snapfleet errors."""

    pass


class TargetConfigError(SnapfleetError):
    """A target configuration is invalid."""

    pass


class InvalidViewport(TargetConfigError):
    """Viewport string does not look like ``<width>x<height>``."""

    def __init__(self, viewport: str) -> None:
        super().__init__(
            f'Invalid viewport "{viewport}". '
            'Here\'s an example of a valid one: "1024x768".'
        )
        self.viewport = viewport


class ViewportTooNarrow(TargetConfigError):
    """Viewport is narrower than the browser can handle."""

    def __init__(self, browser: str, width: int, min_width: int) -> None:
        super().__init__(
            f'Invalid viewport width for the "{browser}" target '
            f"(you provided {width}). Smallest width it can handle is {min_width}."
        )
        self.browser = browser
        self.width = width
        self.min_width = min_width


class ConflictingTargetOption(TargetConfigError):
    """An extra target option would override a reserved payload key."""

    def __init__(self, keys: list[str]) -> None:
        super().__init__(f"Target options may not override reserved keys: {', '.join(keys)}")
        self.keys = keys


class MissingWorkload(SnapfleetError):
    """No static package, page list or snapshot payload list was provided."""

    pass


class TransportError(SnapfleetError):
    """HTTP request to the rendering service failed."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        status_code: int | None = None,
        attempts: int = 1,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.attempts = attempts


class SubmissionError(SnapfleetError):
    """A chunk could not be submitted; the whole run is aborted."""

    def __init__(
        self,
        message: str,
        *,
        chunk_index: int,
        submitted_request_ids: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.chunk_index = chunk_index
        self.submitted_request_ids = list(submitted_request_ids or [])


class PollError(SnapfleetError):
    """Polling for a snap request failed."""

    def __init__(self, message: str, *, request_id: str) -> None:
        super().__init__(message)
        self.request_id = request_id


class PollTimeout(PollError):
    """Snap request did not finish within the configured timeout."""

    pass


class OperationCancelled(SnapfleetError):
    """The caller's cancellation signal was set."""

    pass
