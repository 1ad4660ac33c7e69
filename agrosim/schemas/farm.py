from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from agrosim.schemas.base import CamelModel


class CropType(str, Enum):
    CORN = "Corn"
    WHEAT = "Wheat"
    SOYBEANS = "Soybeans"
    RICE = "Rice"


class SoilType(str, Enum):
    LOAM = "Loam"
    CLAY = "Clay"
    SAND = "Sand"
    SILT = "Silt"


# upper bounds keep every derived score finite
MAX_IRRIGATION_MM_PER_DAY = 1000
MAX_FERTILIZER_KG_PER_HA = 10000
MAX_LIVESTOCK_PER_HA = 1000


class FarmParameters(CamelModel):
    model_config = ConfigDict(frozen=True)

    irrigation_mm_per_day: float = Field(ge=0, le=MAX_IRRIGATION_MM_PER_DAY)
    fertilizer_kg_per_ha: float = Field(ge=0, le=MAX_FERTILIZER_KG_PER_HA)
    livestock_density_per_ha: float = Field(ge=0, le=MAX_LIVESTOCK_PER_HA)
    crop_type: CropType = CropType.CORN
    soil_type: SoilType = SoilType.LOAM
    farming_method: str = "Conventional"


class SimulationRequest(FarmParameters):
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    def to_parameters(self) -> FarmParameters:
        return FarmParameters.model_validate(
            self.model_dump(exclude={"latitude", "longitude"})
        )
