"""Roads Client - Python client for the Google Roads API (snap to roads, speed limits).

Architecture::

    schemas.py       Request/response models (pydantic)
    geometry.py      LatLng and path encoding
    auth.py          API key / client ID query signing
    cancellation.py  Context signal and the cancellable-call race
    roads/           Client and one module per endpoint
    services/        Shared HTTP session
    config.py        ROADS_* settings
    cli.py           Command-line entry point

Data flow: request model → query params → auth → HTTP → response model
"""

__version__ = "0.1.0"

from roads_client.auth import Credentials, MissingCredentialsError
from roads_client.cancellation import Cancelled, Context, DeadlineExceeded
from roads_client.config import Settings
from roads_client.geometry import LatLng
from roads_client.roads import Client
from roads_client.schemas import (
    SnappedPoint,
    SnapToRoadRequest,
    SnapToRoadResponse,
    SpeedLimit,
    SpeedLimitsRequest,
    SpeedLimitsResponse,
    SpeedLimitUnit,
)

__all__ = [
    "Cancelled",
    "Client",
    "Context",
    "Credentials",
    "DeadlineExceeded",
    "LatLng",
    "MissingCredentialsError",
    "Settings",
    "SnapToRoadRequest",
    "SnapToRoadResponse",
    "SnappedPoint",
    "SpeedLimit",
    "SpeedLimitUnit",
    "SpeedLimitsRequest",
    "SpeedLimitsResponse",
    "__version__",
]
