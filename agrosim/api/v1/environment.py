from typing import Optional

from fastapi import APIRouter, Depends

from agrosim.core.errors import AgroSimError, InternalFailure, InvalidInput
from agrosim.core.logger import get_logger
from agrosim.schemas.environment import EnvironmentalReport
from agrosim.services.environment.coordinates import (
    parse_coordinate,
    validate_coordinates,
)
from agrosim.services.environment.provider import (
    EnvironmentSource,
    get_environment_source,
)

router = APIRouter()
logger = get_logger(__name__)


# =========================
# ENVIRONMENTAL DATA (GET)
# =========================
@router.get("/nasaData", response_model=EnvironmentalReport)
def get_environmental_data(
    lat: Optional[str] = None,
    lon: Optional[str] = None,
    # accepted for client compatibility; every dataset returns the same bundle
    dataset: str = "comprehensive",
    source: EnvironmentSource = Depends(get_environment_source),
):
    if not lat or not lon:
        raise InvalidInput("Missing required query params: lat, lon")

    latitude = parse_coordinate(lat, "lat")
    longitude = parse_coordinate(lon, "lon")
    validate_coordinates(latitude, longitude)

    try:
        return source.fetch(latitude, longitude, dataset=dataset)
    except AgroSimError:
        raise
    except Exception as exc:
        logger.exception("Environmental data fetch failed")
        raise InternalFailure.wrap("Failed to fetch NASA data", exc)
