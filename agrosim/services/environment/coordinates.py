import math
from typing import Optional

from agrosim.core.errors import InvalidInput


def parse_coordinate(raw: Optional[str], name: str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidInput(f"Invalid coordinate: {name} must be a number")
    return value


def validate_coordinates(latitude: float, longitude: float) -> None:
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InvalidInput("Coordinates must be finite numbers")

    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise InvalidInput("Coordinates must be in WGS84 (EPSG:4326)")
