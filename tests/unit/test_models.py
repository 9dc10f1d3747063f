"""Tests for data models."""

import pytest

from snapfleet.errors import (
    ConflictingTargetOption,
    InvalidViewport,
    MissingWorkload,
    TargetConfigError,
    ViewportTooNarrow,
)
from snapfleet.models import (
    BrowserName,
    JobInputs,
    Pages,
    SnapPayloads,
    SnapRequestStatus,
    SnapResult,
    StaticPackage,
    TargetConfig,
    resolve_workload,
)


@pytest.mark.parametrize("viewport", ["1024x768", "1x1", "320x10000"])
def test_valid_viewports(viewport: str) -> None:
    """Test that well-formed viewports are accepted."""
    config = TargetConfig(browser="chrome", viewport=viewport)

    width, height = (int(part) for part in viewport.split("x"))
    assert config.width == width
    assert config.height == height


@pytest.mark.parametrize("viewport", ["", "1024", "1024x", "x768", "1024X768", "1024 x 768", "-1x5", "1024x768\n"])
def test_invalid_viewports(viewport: str) -> None:
    """Test that malformed viewports raise InvalidViewport."""
    with pytest.raises(InvalidViewport) as exc_info:
        TargetConfig(browser="firefox", viewport=viewport)

    assert exc_info.value.viewport == viewport


def test_edge_viewport_too_narrow() -> None:
    """Test edge rejects widths below 400."""
    with pytest.raises(ViewportTooNarrow) as exc_info:
        TargetConfig(browser="edge", viewport="399x800")

    assert exc_info.value.width == 399
    assert exc_info.value.min_width == 400


def test_edge_minimum_width_accepted() -> None:
    """Test edge accepts exactly 400 pixels."""
    config = TargetConfig(browser="edge", viewport="400x800")

    assert config.browser == BrowserName.EDGE


def test_narrow_viewport_allowed_for_other_browsers() -> None:
    """Test the width limit only applies to edge."""
    config = TargetConfig(browser="chrome", viewport="320x640")

    assert config.width == 320


def test_target_config_defaults() -> None:
    """Test target config default values."""
    config = TargetConfig(browser="safari", viewport="800x600")

    assert config.chunks == 1
    assert config.max_height is None
    assert config.options == {}


def test_target_config_is_immutable() -> None:
    """Test target config cannot be changed after construction."""
    config = TargetConfig(browser="chrome", viewport="800x600")

    with pytest.raises(Exception):
        config.chunks = 4  # type: ignore[misc]


def test_reserved_options_rejected() -> None:
    """Test options cannot override payload keys."""
    with pytest.raises(ConflictingTargetOption) as exc_info:
        TargetConfig(
            browser="chrome",
            viewport="800x600",
            options={"maxHeight": 10, "viewport": "1x1", "scrollStitch": True},
        )

    assert exc_info.value.keys == ["maxHeight", "viewport"]


def test_from_user_config() -> None:
    """Test building a config from the camelCase config file shape."""
    config = TargetConfig.from_user_config(
        {"viewport": "1024x768", "chunks": 3, "maxHeight": 5000, "scrollStitch": True},
        browser="firefox",
    )

    assert config.browser == BrowserName.FIREFOX
    assert config.chunks == 3
    assert config.max_height == 5000
    assert config.options == {"scrollStitch": True}


def test_from_user_config_without_viewport() -> None:
    """Test a missing viewport is reported as an invalid viewport."""
    with pytest.raises(InvalidViewport):
        TargetConfig.from_user_config({"browser": "chrome"})


def test_workload_precedence() -> None:
    """Test static package wins over pages, pages win over snap payloads."""
    assert isinstance(
        resolve_workload(static_package="static.zip", pages=[{}], snap_payloads=[{}]),
        StaticPackage,
    )
    assert isinstance(resolve_workload(pages=[{"url": "/"}], snap_payloads=[{}]), Pages)
    assert isinstance(resolve_workload(snap_payloads=[]), SnapPayloads)


def test_missing_workload() -> None:
    """Test that inputs without any workload are rejected."""
    with pytest.raises(MissingWorkload):
        resolve_workload()


def test_job_inputs_from_bundle() -> None:
    """Test job inputs built from bundler output."""
    inputs = JobInputs.from_bundle(
        target_name="chrome-large",
        global_css=".a { color: red }",
        assets_package="assets-123",
        snap_payloads=[{"file": "a.js", "name": "default"}],
    )

    assert inputs.workload.kind == "snap-payloads"
    assert inputs.async_results is False
    assert inputs.static_package is None


def test_snap_result_tagging() -> None:
    """Test result items keep their fields and gain the request id."""
    item = {"component": "Button", "variant": "default", "url": "https://cdn/x.png"}
    result = SnapResult.tagged(item, "abc")

    assert result.snap_request_id == "abc"
    assert result.to_dict() == {**item, "snapRequestId": "abc"}
    assert item == {"component": "Button", "variant": "default", "url": "https://cdn/x.png"}


def test_snap_request_status() -> None:
    """Test status responses."""
    assert SnapRequestStatus(status="done", result=[]).is_done
    assert not SnapRequestStatus(status="pending").is_done


def test_unlisted_browser_name_accepted() -> None:
    """Test browser names outside the well-known list are kept as given."""
    config = TargetConfig(browser="internet explorer", viewport="1024x768")

    assert config.browser == "internet explorer"


def test_blank_browser_name_rejected() -> None:
    """Test an empty browser name is a target config error."""
    with pytest.raises(TargetConfigError):
        TargetConfig.from_user_config({"viewport": "1024x768"})
