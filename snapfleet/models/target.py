"""Target configuration models."""

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from snapfleet.errors import (
    ConflictingTargetOption,
    InvalidViewport,
    TargetConfigError,
    ViewportTooNarrow,
)

VIEWPORT_PATTERN = re.compile(r"^([0-9]+)x([0-9]+)$")
MIN_EDGE_WIDTH = 400

# Keys the submitter writes into every payload; options must not shadow them.
RESERVED_OPTION_KEYS = frozenset(
    {
        "viewport",
        "maxHeight",
        "chunks",
        "globalCSS",
        "snapPayloads",
        "chunk",
        "staticPackage",
        "assetsPackage",
        "pages",
    }
)


class BrowserName(str, Enum):
    """Well-known browser names. Other names are passed through to the service."""

    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"
    SAFARI = "safari"
    IOS_SAFARI = "ios-safari"


def parse_viewport(viewport: str) -> tuple[int, int]:
    """Parse ``"<width>x<height>"`` into integers."""
    match = VIEWPORT_PATTERN.fullmatch(viewport)
    if not match:
        raise InvalidViewport(viewport)
    return int(match.group(1)), int(match.group(2))


class TargetConfig(BaseModel):
    """Browser, viewport and options a workload is rendered against."""

    browser: str
    viewport: str
    chunks: int = Field(default=1, ge=1, description="Number of jobs to split the workload into")
    max_height: int | None = Field(default=None, gt=0, alias="maxHeight")
    options: dict[str, Any] = Field(
        default_factory=dict, description="Browser-specific options merged into the payload"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def check_target(self) -> "TargetConfig":
        if not self.browser.strip():
            raise TargetConfigError("Target browser name is required")

        width, _ = parse_viewport(self.viewport)
        if self.browser == BrowserName.EDGE and width < MIN_EDGE_WIDTH:
            raise ViewportTooNarrow(self.browser, width, MIN_EDGE_WIDTH)

        conflicts = sorted(RESERVED_OPTION_KEYS.intersection(self.options))
        if conflicts:
            raise ConflictingTargetOption(conflicts)
        return self

    @property
    def width(self) -> int:
        return parse_viewport(self.viewport)[0]

    @property
    def height(self) -> int:
        return parse_viewport(self.viewport)[1]

    @classmethod
    def from_user_config(
        cls, config: Mapping[str, Any], browser: str | None = None
    ) -> "TargetConfig":
        """
        Build a config from the camelCase shape used in target config files.

        Args:
            config: Mapping with ``viewport``, optional ``browser``, ``chunks``
                and ``maxHeight``. Every other key becomes a browser option.
            browser: Browser name, overrides ``config["browser"]``

        Returns:
            Validated TargetConfig
        """
        values = dict(config)
        browser_name = browser if browser is not None else values.pop("browser", "")
        values.pop("browser", None)
        viewport = values.pop("viewport", "")
        chunks = values.pop("chunks", 1)
        max_height = values.pop("maxHeight", None)
        return cls(
            browser=browser_name,
            viewport=viewport,
            chunks=chunks,
            max_height=max_height,
            options=values,
        )
