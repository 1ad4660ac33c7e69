from typing import List, Optional

from pydantic import Field

from agrosim.schemas.base import CamelModel


class PowerReadings(CamelModel):
    """NASA POWER weather and climate."""

    temperature2m: float
    precipitation: float
    solar_radiation: float
    humidity: float
    wind_speed: float


class SmapReadings(CamelModel):
    """SMAP soil moisture."""

    soil_moisture_surface: float
    soil_moisture_root_zone: float
    soil_temperature: float


class ModisReadings(CamelModel):
    """MODIS vegetation health."""

    ndvi: float
    evi: float
    lai: float
    fpar: float


class GpmReadings(CamelModel):
    """GPM precipitation."""

    precipitation_rate: float
    precipitation_accumulation: float


class DroughtReadings(CamelModel):
    drought_index: float
    drought_category: str
    soil_moisture_percentile: float


class SoilHealth(CamelModel):
    score: float
    moisture_level: str
    temperature_status: str
    organic_matter: float
    ph: float = Field(alias="pH")
    nutrient_level: str


class IrrigationNeeds(CamelModel):
    daily_requirement: float
    weekly_requirement: float
    efficiency: str
    recommended_method: str
    water_stress: str


class CropStress(CamelModel):
    overall_stress: int
    heat_stress: str
    cold_stress: str
    water_stress: str
    vegetation_health: str


class WaterBalance(CamelModel):
    inflow: float
    outflow: float
    net_balance: float
    soil_storage: float
    runoff_risk: str


class DerivedMetrics(CamelModel):
    soil_health: SoilHealth
    irrigation_needs: IrrigationNeeds
    crop_stress: CropStress
    water_balance: WaterBalance


class EnvironmentalData(CamelModel):
    power: PowerReadings
    smap: SmapReadings
    modis: ModisReadings
    gpm: GpmReadings
    drought: DroughtReadings
    derived: Optional[DerivedMetrics] = None


class Location(CamelModel):
    lat: float
    lon: float


class DataRecommendation(CamelModel):
    type: str
    priority: str
    action: str
    impact: str
    implementation: str


class EnvironmentalReport(CamelModel):
    source: str
    location: Location
    timestamp: str
    datasets: List[str]
    data: EnvironmentalData
    insights: List[str] = []
    recommendations: List[DataRecommendation] = []
