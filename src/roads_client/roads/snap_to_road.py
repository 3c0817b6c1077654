"""
Snap to Roads: fit a GPS trace to the roads a vehicle most likely travelled.

API docs: https://developers.google.com/maps/documentation/roads/snap
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from roads_client.cancellation import Context, run_cancellable
from roads_client.geometry import encode_path
from roads_client.schemas import SnapToRoadRequest, SnapToRoadResponse

if TYPE_CHECKING:
    from roads_client.roads.client import Client

SNAP_TO_ROADS_PATH = "/v1/snapToRoads"


def build_params(request: SnapToRoadRequest) -> list[tuple[str, str]]:
    """Query parameters for a snapToRoads call, before authentication."""
    params = [("path", encode_path(request.path))]
    if request.interpolate:
        params.append(("interpolate", "true"))
    return params


def snap_to_road(
    client: Client,
    request: SnapToRoadRequest,
    ctx: Context | None = None,
) -> SnapToRoadResponse:
    """
    Snap ``request.path`` to roads.

    Args:
        client: Client providing base URL, credentials and transport.
        request: Path to snap, and whether to interpolate.
        ctx: Cancellation signal. If it fires first, its ``Cancelled`` /
            ``DeadlineExceeded`` error is raised and the HTTP call's result
            is dropped.

    Raises:
        ValueError: If the path is empty. No HTTP call is made.
    """
    if not request.path:
        msg = "snapToRoad: You must specify a Path"
        raise ValueError(msg)

    params = build_params(request)
    return run_cancellable(
        ctx or Context.background(),
        lambda: client.get(SNAP_TO_ROADS_PATH, params, SnapToRoadResponse),
    )
