"""Snap request status and result models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RequestStatus(str, Enum):
    """States reported by the rendering service for a snap request."""

    PENDING = "pending"
    DONE = "done"


class SnapResult(BaseModel):
    """One rendered item, tagged with the request it came from."""

    snap_request_id: str = Field(alias="snapRequestId")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @classmethod
    def tagged(cls, item: dict[str, Any], request_id: str) -> "SnapResult":
        """Copy a service result item and tag it with ``request_id``."""
        return cls.model_validate({**item, "snapRequestId": request_id})

    def to_dict(self) -> dict[str, Any]:
        """Service item fields plus ``snapRequestId``."""
        return self.model_dump(by_alias=True)


class SnapRequestStatus(BaseModel):
    """Response of the snap request status endpoint."""

    status: str
    result: list[dict[str, Any]] | None = None

    @property
    def is_done(self) -> bool:
        return self.status == RequestStatus.DONE.value
