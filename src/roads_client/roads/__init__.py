"""Google Roads API.

Public API:
  - client: Client (base URL, credentials, transport)
  - snap_to_road: snapToRoads endpoint
  - speed_limits: speedLimits endpoint
"""

from roads_client.roads.client import Client
from roads_client.roads.snap_to_road import SNAP_TO_ROADS_PATH
from roads_client.roads.speed_limits import SPEED_LIMITS_PATH

__all__ = [
    "SNAP_TO_ROADS_PATH",
    "SPEED_LIMITS_PATH",
    "Client",
]
