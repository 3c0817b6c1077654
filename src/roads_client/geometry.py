"""Coordinates and their canonical query-string form."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from pydantic import BaseModel, Field


def format_degrees(value: float) -> str:
    """
    Shortest decimal form of a float, without exponent or trailing ``.0``.

    ``1.0 -> "1"``, ``-122.675 -> "-122.675"``, ``1e-07 -> "0.0000001"``.
    """
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class LatLng(BaseModel):
    """A latitude/longitude pair in degrees."""

    model_config = {"frozen": True}

    lat: float = Field(..., description="Latitude in degrees")
    lng: float = Field(..., description="Longitude in degrees")

    def __str__(self) -> str:
        return f"{format_degrees(self.lat)},{format_degrees(self.lng)}"


def encode_path(path: Iterable[LatLng]) -> str:
    """Join coordinates as ``lat,lng|lat,lng|...`` in input order."""
    return "|".join(str(point) for point in path)


def parse_lat_lng(text: str) -> LatLng:
    """Parse ``"lat,lng"`` into a LatLng. Raises ValueError on bad input."""
    parts = text.strip().split(",")
    if len(parts) != 2:
        msg = f"Expected 'lat,lng', got {text!r}"
        raise ValueError(msg)
    return LatLng(lat=float(parts[0]), lng=float(parts[1]))


def parse_path(text: str) -> tuple[LatLng, ...]:
    """Parse a pipe-separated ``lat,lng|lat,lng`` string."""
    return tuple(parse_lat_lng(part) for part in text.split("|") if part.strip())
