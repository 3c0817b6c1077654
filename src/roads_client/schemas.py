"""
Request and response models for the Roads API.

Pydantic models mirror the JSON bodies the service returns. Field names are
snake_case in Python and camelCase on the wire (``placeId``, ``originalIndex``).
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from roads_client.geometry import LatLng


class SpeedLimitUnit(StrEnum):
    """Units for speed limits."""

    MPH = "MPH"
    KPH = "KPH"


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Snap to Roads
# =============================================================================


class SnapToRoadRequest(BaseModel):
    """Request for the snapToRoads endpoint."""

    model_config = ConfigDict(frozen=True)

    path: tuple[LatLng, ...] = Field(..., description="Path to be snapped")
    interpolate: bool = Field(
        default=False,
        description="Add points so the result follows the full road geometry",
    )


class SnappedPoint(_WireModel):
    """An original path point snapped to a road."""

    location: LatLng
    original_index: int | None = Field(
        default=None,
        description="Index into the request path. None for interpolated points.",
    )
    place_id: str = ""

    @property
    def is_interpolated(self) -> bool:
        return self.original_index is None


class SnapToRoadResponse(_WireModel):
    """Snapped points, in path order."""

    snapped_points: list[SnappedPoint] = Field(default_factory=list)


# =============================================================================
# Speed Limits
# =============================================================================


class SpeedLimitsRequest(BaseModel):
    """Request for the speedLimits endpoint. Needs a path, place IDs, or both."""

    model_config = ConfigDict(frozen=True)

    path: tuple[LatLng, ...] = ()
    place_ids: tuple[str, ...] = Field(default=(), description="Sent as repeated placeId")
    units: SpeedLimitUnit | None = Field(default=None, description="Server default is KPH")


class SpeedLimit(_WireModel):
    """The speed limit of one road segment."""

    place_id: str
    speed_limit: float
    units: SpeedLimitUnit


class SpeedLimitsResponse(_WireModel):
    """Speed limits plus the snapped points for any requested path."""

    speed_limits: list[SpeedLimit] = Field(default_factory=list)
    snapped_points: list[SnappedPoint] = Field(default_factory=list)
