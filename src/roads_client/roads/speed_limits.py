"""
Speed Limits: posted speed limits for road segments.

Segments are given as a path (snapped first, like snapToRoads), as place IDs
from an earlier snap, or both.

API docs: https://developers.google.com/maps/documentation/roads/speed-limits
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from roads_client.cancellation import Context, run_cancellable
from roads_client.geometry import encode_path
from roads_client.schemas import SpeedLimitsRequest, SpeedLimitsResponse

if TYPE_CHECKING:
    from roads_client.roads.client import Client

SPEED_LIMITS_PATH = "/v1/speedLimits"


def build_params(request: SpeedLimitsRequest) -> list[tuple[str, str]]:
    """
    Query parameters for a speedLimits call, before authentication.

    ``path`` is left out entirely when no path is given. Each place ID becomes
    its own ``placeId`` parameter, in order and without de-duplication.
    ``units`` is only sent when set; the server defaults to KPH.
    """
    params: list[tuple[str, str]] = []
    if request.path:
        params.append(("path", encode_path(request.path)))
    params.extend(("placeId", place_id) for place_id in request.place_ids)
    if request.units is not None:
        params.append(("units", request.units.value))
    return params


def speed_limits(
    client: Client,
    request: SpeedLimitsRequest,
    ctx: Context | None = None,
) -> SpeedLimitsResponse:
    """
    Fetch speed limits for a path and/or place IDs.

    Args:
        client: Client providing base URL, credentials and transport.
        request: Path, place IDs and optional units.
        ctx: Cancellation signal; see ``roads.snap_to_road.snap_to_road``.

    Raises:
        ValueError: If neither a path nor any place ID is given. No HTTP call
            is made.
    """
    if not request.path and not request.place_ids:
        msg = "speedLimits: You must specify a Path or PlaceID"
        raise ValueError(msg)

    params = build_params(request)
    return run_cancellable(
        ctx or Context.background(),
        lambda: client.get(SPEED_LIMITS_PATH, params, SpeedLimitsResponse),
    )
