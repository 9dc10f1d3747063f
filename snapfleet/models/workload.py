"""Workload and job input models."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from snapfleet.errors import MissingWorkload


class StaticPackage(BaseModel):
    """Pre-built bundle; chunks only carry their index."""

    kind: Literal["static"] = "static"


class Pages(BaseModel):
    """Ordered list of page descriptors."""

    kind: Literal["pages"] = "pages"
    pages: list[dict[str, Any]] = Field(default_factory=list)


class SnapPayloads(BaseModel):
    """Ordered list of snapshot payloads extracted from a bundle."""

    kind: Literal["snap-payloads"] = "snap-payloads"
    snap_payloads: list[dict[str, Any]] = Field(default_factory=list)


Workload = Annotated[StaticPackage | Pages | SnapPayloads, Field(discriminator="kind")]


def resolve_workload(
    *,
    static_package: str | None = None,
    pages: list[dict[str, Any]] | None = None,
    snap_payloads: list[dict[str, Any]] | None = None,
) -> StaticPackage | Pages | SnapPayloads:
    """
    Pick the workload variant from collaborator output.

    A static package wins over pages, pages win over snapshot payloads.
    """
    if static_package:
        return StaticPackage()
    if pages is not None:
        return Pages(pages=pages)
    if snap_payloads is not None:
        return SnapPayloads(snap_payloads=snap_payloads)
    raise MissingWorkload("Expected a static package, a list of pages or a list of snap payloads")


class JobInputs(BaseModel):
    """Everything a target needs to render one workload."""

    workload: Workload
    target_name: str
    global_css: str | None = None
    assets_package: str | None = None
    static_package: str | None = None
    async_results: bool = False

    @classmethod
    def from_bundle(
        cls,
        *,
        target_name: str,
        global_css: str | None = None,
        assets_package: str | None = None,
        static_package: str | None = None,
        pages: list[dict[str, Any]] | None = None,
        snap_payloads: list[dict[str, Any]] | None = None,
        async_results: bool = False,
    ) -> "JobInputs":
        """Build inputs from the bundler/extractor output fields."""
        return cls(
            workload=resolve_workload(
                static_package=static_package,
                pages=pages,
                snap_payloads=snap_payloads,
            ),
            target_name=target_name,
            global_css=global_css,
            assets_package=assets_package,
            static_package=static_package,
            async_results=async_results,
        )
