from typing import Optional

from fastapi import APIRouter, Body, Depends

from agrosim.core.config import settings
from agrosim.core.errors import AgroSimError, InternalFailure, InvalidInput
from agrosim.core.logger import get_logger
from agrosim.schemas.farm import SimulationRequest
from agrosim.schemas.simulation import SimulationResult
from agrosim.services.environment.provider import (
    EnvironmentSource,
    get_environment_source,
)
from agrosim.services.scoring_engine import run_simulation

router = APIRouter()
logger = get_logger(__name__)


# =========================
# RUN SIMULATION (POST)
# =========================
@router.post("/simulate", response_model=SimulationResult)
def simulate(
    payload: Optional[SimulationRequest] = Body(default=None),
    source: EnvironmentSource = Depends(get_environment_source),
):
    if payload is None:
        raise InvalidInput("Missing request body")

    latitude = settings.DEFAULT_LATITUDE if payload.latitude is None else payload.latitude
    longitude = settings.DEFAULT_LONGITUDE if payload.longitude is None else payload.longitude

    try:
        report = source.fetch(latitude, longitude)
        return run_simulation(payload.to_parameters(), report.data)
    except AgroSimError:
        raise
    except Exception as exc:
        logger.exception("Simulation failed")
        raise InternalFailure.wrap("Simulation failed", exc)
