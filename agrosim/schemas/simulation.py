from enum import Enum
from typing import List

from pydantic import Field

from agrosim.schemas.base import CamelModel


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Recommendation(CamelModel):
    category: str
    priority: Priority
    action: str
    impact: str
    implementation: str


class Comparison(CamelModel):
    baseline: int
    current: int = Field(
        description="Unclamped yield; yieldScore on the result is capped at 100"
    )
    improvement: int
    benchmark: str


class LivestockAnalysis(CamelModel):
    soil_compaction: float
    nutrient_cycling: float
    water_consumption: float
    greenhouse_gas_emissions: float
    benefits: List[str]
    concerns: List[str]


class IrrigationAnalysis(CamelModel):
    efficiency: int
    water_stress: str
    optimal_timing: str
    recommended_method: str
    water_savings: int


class SoilHealthMetrics(CamelModel):
    organic_matter: float
    ph: float = Field(alias="pH")
    nutrient_level: str
    moisture_retention: float
    compaction_risk: str


class SimulationResult(CamelModel):
    yield_score: int
    sustainability_score: int
    soil_health_score: int
    water_efficiency_score: int
    carbon_footprint: int
    economic_viability: int
    insights: List[str]
    recommendations: List[Recommendation]
    comparison: Comparison
    livestock_impact: LivestockAnalysis
    irrigation_analysis: IrrigationAnalysis
    soil_health_metrics: SoilHealthMetrics
