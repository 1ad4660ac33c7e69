import math
from typing import NamedTuple

from agrosim.core.logger import get_logger
from agrosim.schemas.environment import EnvironmentalData
from agrosim.schemas.farm import CropType, FarmParameters, SoilType
from agrosim.schemas.simulation import (
    Comparison,
    IrrigationAnalysis,
    LivestockAnalysis,
    SimulationResult,
    SoilHealthMetrics,
)
from agrosim.services.insight_engine import (
    generate_insights,
    generate_recommendations,
)

logger = get_logger(__name__)


CROP_BASE_YIELD = {
    CropType.CORN: 100,
    CropType.WHEAT: 80,
    CropType.SOYBEANS: 90,
    CropType.RICE: 85,
}

SOIL_YIELD_FACTOR = {
    SoilType.LOAM: 1.0,
    SoilType.CLAY: 0.8,
    SoilType.SAND: 0.7,
    SoilType.SILT: 0.9,
}

SOIL_NUTRIENT_RETENTION = {
    SoilType.LOAM: 0.8,
    SoilType.CLAY: 0.9,
    SoilType.SAND: 0.5,
    SoilType.SILT: 0.7,
}

OPTIMAL_IRRIGATION_MM = 5
OPTIMAL_IRRIGATION_RANGE = (3, 7)
BASELINE_YIELD = 100

LIVESTOCK_BENEFITS = [
    "Natural fertilizer through manure",
    "Increased soil organic matter",
    "Diversified income streams",
]

LIVESTOCK_CONCERNS = [
    "Increased soil compaction",
    "Higher water consumption",
    "Potential overgrazing",
]


class IrrigationImpact(NamedTuple):
    yield_boost: float
    water_efficiency: float


class FertilizerImpact(NamedTuple):
    yield_boost: float
    soil_impact: float


class LivestockImpact(NamedTuple):
    yield_reduction: float
    soil_compaction: float


class ScoreCard(NamedTuple):
    yield_score: float
    sustainability: float
    soil_health: float
    water_efficiency: float


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


# =========================
# YIELD COMPONENTS
# =========================
def calculate_base_yield(
    crop_type: CropType, soil_type: SoilType, env: EnvironmentalData
) -> float:
    weather_factor = 0.9 if env.power.temperature2m > 25 else 1.1
    return CROP_BASE_YIELD[crop_type] * SOIL_YIELD_FACTOR[soil_type] * weather_factor


def calculate_irrigation_impact(
    irrigation_mm: float, env: EnvironmentalData
) -> IrrigationImpact:
    yield_boost = 0.0
    if irrigation_mm > 0:
        efficiency = 0.8 if env.smap.soil_moisture_root_zone > 0.25 else 0.6
        yield_boost = min(irrigation_mm * 2 * efficiency, 20)

    water_efficiency = 1.0
    if irrigation_mm > OPTIMAL_IRRIGATION_MM:
        water_efficiency = max(
            0.5, 1 - (irrigation_mm - OPTIMAL_IRRIGATION_MM) * 0.1
        )

    return IrrigationImpact(yield_boost, water_efficiency)


def calculate_fertilizer_impact(
    fertilizer_kg: float, soil_type: SoilType
) -> FertilizerImpact:
    retention = SOIL_NUTRIENT_RETENTION[soil_type]
    yield_boost = min(fertilizer_kg * 0.5 * retention, 15)

    if fertilizer_kg > 20:
        soil_impact = -5
    elif fertilizer_kg > 10:
        soil_impact = -2
    else:
        soil_impact = 0

    return FertilizerImpact(yield_boost, soil_impact)


def calculate_livestock_impact(density: float) -> LivestockImpact:
    return LivestockImpact(yield_reduction=density * 0.5, soil_compaction=density * 2)


# =========================
# SCORES
# =========================
def calculate_sustainability_score(
    params: FarmParameters, env: EnvironmentalData
) -> float:
    score = 100

    if params.irrigation_mm_per_day > 8:
        score -= 15
    elif params.irrigation_mm_per_day > 5:
        score -= 8

    if params.fertilizer_kg_per_ha > 30:
        score -= 20
    elif params.fertilizer_kg_per_ha > 20:
        score -= 10

    if params.livestock_density_per_ha > 5:
        score -= 10
    elif params.livestock_density_per_ha > 3:
        score -= 5

    if env.modis.ndvi > 0.7:
        score += 5
    if env.smap.soil_moisture_root_zone > 0.3:
        score += 3

    return clamp(score)


def calculate_soil_health_score(
    params: FarmParameters, env: EnvironmentalData
) -> float:
    score = 80

    if params.fertilizer_kg_per_ha > 25:
        score -= 10
    elif params.fertilizer_kg_per_ha < 5:
        score -= 5

    score -= params.livestock_density_per_ha * 2

    # over-irrigation
    if params.irrigation_mm_per_day > 10:
        score -= 8

    moisture = env.smap.soil_moisture_root_zone
    if moisture > 0.3:
        score += 5
    elif moisture < 0.2:
        score -= 10

    return clamp(score)


def calculate_water_efficiency_score(
    irrigation_mm: float, env: EnvironmentalData
) -> float:
    low, high = OPTIMAL_IRRIGATION_RANGE
    score = 100

    if irrigation_mm < low:
        score -= (low - irrigation_mm) * 5
    elif irrigation_mm > high:
        score -= (irrigation_mm - high) * 8

    # monthly precipitation spread to a daily equivalent
    daily_precipitation = env.power.precipitation / 30
    if abs(irrigation_mm - daily_precipitation) < 2:
        score += 10

    return clamp(score)


def calculate_carbon_footprint(params: FarmParameters) -> float:
    """kg CO2 per hectare per year."""
    return (
        50
        + params.fertilizer_kg_per_ha * 2
        + params.irrigation_mm_per_day * 365 * 0.1
        + params.livestock_density_per_ha * 15
    )


def calculate_economic_viability(params: FarmParameters, yield_score: float) -> float:
    revenue = yield_score * 0.5
    costs = (
        params.fertilizer_kg_per_ha * 0.8
        + params.irrigation_mm_per_day * 365 * 0.05
        + params.livestock_density_per_ha * 20
    )
    return max(0, revenue - costs)


# =========================
# ANALYSES
# =========================
def build_comparison(yield_score: float) -> Comparison:
    improvement = (yield_score - BASELINE_YIELD) / BASELINE_YIELD * 100

    if improvement > 10:
        benchmark = "Above Average"
    elif improvement > 0:
        benchmark = "Average"
    else:
        benchmark = "Below Average"

    return Comparison(
        baseline=BASELINE_YIELD,
        current=round_half_up(yield_score),
        improvement=round_half_up(improvement),
        benchmark=benchmark,
    )


def analyze_livestock(density: float) -> LivestockAnalysis:
    return LivestockAnalysis(
        soil_compaction=density * 15,
        nutrient_cycling=density * 8,
        water_consumption=density * 50,
        greenhouse_gas_emissions=density * 12,
        benefits=list(LIVESTOCK_BENEFITS) if density > 0 else [],
        concerns=list(LIVESTOCK_CONCERNS) if density > 3 else [],
    )


def analyze_irrigation(irrigation_mm: float, env: EnvironmentalData) -> IrrigationAnalysis:
    if irrigation_mm > 8:
        water_stress = "High"
    elif irrigation_mm > 5:
        water_stress = "Moderate"
    else:
        water_stress = "Low"

    return IrrigationAnalysis(
        efficiency=85 if env.smap.soil_moisture_surface > 0.25 else 70,
        water_stress=water_stress,
        optimal_timing="Early morning (6-8 AM)",
        recommended_method="Drip Irrigation" if irrigation_mm > 6 else "Sprinkler System",
        water_savings=20 if irrigation_mm > 7 else 0,
    )


def analyze_soil_health(params: FarmParameters, env: EnvironmentalData) -> SoilHealthMetrics:
    fertilizer = params.fertilizer_kg_per_ha
    density = params.livestock_density_per_ha

    if fertilizer > 20:
        nutrient_level = "High"
    elif fertilizer > 10:
        nutrient_level = "Moderate"
    else:
        nutrient_level = "Low"

    if density > 4:
        compaction_risk = "High"
    elif density > 2:
        compaction_risk = "Moderate"
    else:
        compaction_risk = "Low"

    return SoilHealthMetrics(
        organic_matter=2.5 + density * 0.3 - fertilizer * 0.02,
        ph=6.5 + fertilizer * 0.01,
        nutrient_level=nutrient_level,
        moisture_retention=env.smap.soil_moisture_root_zone * 100,
        compaction_risk=compaction_risk,
    )


# =========================
# SIMULATION
# =========================
def run_simulation(params: FarmParameters, env: EnvironmentalData) -> SimulationResult:
    base_yield = calculate_base_yield(params.crop_type, params.soil_type, env)
    irrigation = calculate_irrigation_impact(params.irrigation_mm_per_day, env)
    fertilizer = calculate_fertilizer_impact(params.fertilizer_kg_per_ha, params.soil_type)
    livestock = calculate_livestock_impact(params.livestock_density_per_ha)

    yield_score = max(
        0,
        base_yield
        + irrigation.yield_boost
        + fertilizer.yield_boost
        - livestock.yield_reduction,
    )

    scores = ScoreCard(
        yield_score=yield_score,
        sustainability=calculate_sustainability_score(params, env),
        soil_health=calculate_soil_health_score(params, env),
        water_efficiency=calculate_water_efficiency_score(
            params.irrigation_mm_per_day, env
        ),
    )

    result = SimulationResult(
        yield_score=round_half_up(clamp(scores.yield_score)),
        sustainability_score=round_half_up(scores.sustainability),
        soil_health_score=round_half_up(scores.soil_health),
        water_efficiency_score=round_half_up(scores.water_efficiency),
        carbon_footprint=round_half_up(calculate_carbon_footprint(params)),
        economic_viability=round_half_up(
            calculate_economic_viability(params, yield_score)
        ),
        insights=generate_insights(params, env),
        recommendations=generate_recommendations(params, scores),
        comparison=build_comparison(yield_score),
        livestock_impact=analyze_livestock(params.livestock_density_per_ha),
        irrigation_analysis=analyze_irrigation(params.irrigation_mm_per_day, env),
        soil_health_metrics=analyze_soil_health(params, env),
    )

    logger.debug(
        "Simulation for %s on %s: yield=%s sustainability=%s",
        params.crop_type.value,
        params.soil_type.value,
        result.yield_score,
        result.sustainability_score,
    )

    return result
