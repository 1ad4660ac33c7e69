"""
Metrics derived from raw environmental readings, plus the short list of
insights and recommendations attached to every environmental report.
"""
from typing import List

from agrosim.schemas.environment import (
    CropStress,
    DataRecommendation,
    DerivedMetrics,
    EnvironmentalData,
    IrrigationNeeds,
    SoilHealth,
    WaterBalance,
)

DROUGHT_CATEGORIES = (
    (0.2, "None"),
    (0.3, "Abnormally Dry"),
    (0.4, "Moderate Drought"),
    (0.5, "Severe Drought"),
    (0.6, "Extreme Drought"),
)


def drought_category(index: float) -> str:
    for threshold, category in DROUGHT_CATEGORIES:
        if index < threshold:
            return category
    return "Exceptional Drought"


def evapotranspiration(temperature: float) -> float:
    return temperature * 0.1 + 2


def soil_health(data: EnvironmentalData, organic_matter: float, ph: float) -> SoilHealth:
    moisture = data.smap.soil_moisture_root_zone
    temperature = data.smap.soil_temperature
    ndvi = data.modis.ndvi

    if moisture > 0.3:
        moisture_level = "Optimal"
    elif moisture > 0.2:
        moisture_level = "Moderate"
    else:
        moisture_level = "Low"

    if temperature > 25:
        temperature_status = "Hot"
    elif temperature < 15:
        temperature_status = "Cold"
    else:
        temperature_status = "Optimal"

    return SoilHealth(
        score=min(100, moisture * 100 + (25 - abs(temperature - 20)) * 2 + ndvi * 50),
        moisture_level=moisture_level,
        temperature_status=temperature_status,
        organic_matter=organic_matter,
        ph=ph,
        nutrient_level="Moderate",
    )


def irrigation_needs(data: EnvironmentalData) -> IrrigationNeeds:
    deficit = evapotranspiration(data.power.temperature2m) - data.power.precipitation
    required = max(0, deficit * 0.8)

    if deficit > 3:
        water_stress = "High"
    elif deficit > 1:
        water_stress = "Moderate"
    else:
        water_stress = "Low"

    return IrrigationNeeds(
        daily_requirement=required,
        weekly_requirement=required * 7,
        efficiency="High" if data.smap.soil_moisture_surface > 0.25 else "Moderate",
        recommended_method="Drip Irrigation" if required > 5 else "Sprinkler",
        water_stress=water_stress,
    )


def _level(value, high, moderate, above=True):
    if above:
        if value > high:
            return "High"
        if value > moderate:
            return "Moderate"
        return "Low"
    if value < high:
        return "High"
    if value < moderate:
        return "Moderate"
    return "Low"


def crop_stress(data: EnvironmentalData) -> CropStress:
    ndvi = data.modis.ndvi
    temperature = data.power.temperature2m
    moisture = data.smap.soil_moisture_root_zone

    stress = 0
    if temperature > 30:
        stress += 20
    if temperature < 10:
        stress += 15
    if moisture < 0.2:
        stress += 25
    if ndvi < 0.5:
        stress += 20

    if ndvi > 0.7:
        vegetation = "Excellent"
    elif ndvi > 0.5:
        vegetation = "Good"
    else:
        vegetation = "Poor"

    return CropStress(
        overall_stress=stress,
        heat_stress=_level(temperature, 30, 25),
        cold_stress=_level(temperature, 10, 15, above=False),
        water_stress=_level(moisture, 0.2, 0.25, above=False),
        vegetation_health=vegetation,
    )


def water_balance(data: EnvironmentalData) -> WaterBalance:
    precipitation = data.power.precipitation
    outflow = evapotranspiration(data.power.temperature2m)

    return WaterBalance(
        inflow=precipitation,
        outflow=outflow,
        net_balance=precipitation - outflow,
        soil_storage=data.smap.soil_moisture_surface * 100,
        runoff_risk=_level(precipitation, 20, 10),
    )


def derive_metrics(data: EnvironmentalData, organic_matter: float, ph: float) -> DerivedMetrics:
    return DerivedMetrics(
        soil_health=soil_health(data, organic_matter, ph),
        irrigation_needs=irrigation_needs(data),
        crop_stress=crop_stress(data),
        water_balance=water_balance(data),
    )


def report_insights(data: EnvironmentalData, derived: DerivedMetrics) -> List[str]:
    insights = []

    if data.power.temperature2m > 28:
        insights.append(
            "High temperatures detected - consider shade management and increased irrigation"
        )
    if data.smap.soil_moisture_root_zone < 0.25:
        insights.append("Soil moisture is below optimal levels - irrigation recommended")
    if data.modis.ndvi > 0.7:
        insights.append(
            "Vegetation health is excellent - current management practices are effective"
        )
    if derived.irrigation_needs.daily_requirement > 5:
        insights.append("High irrigation demand detected - monitor water usage efficiency")
    if derived.crop_stress.overall_stress > 50:
        insights.append("Crop stress levels are elevated - review management practices")

    return insights


def report_recommendations(
    data: EnvironmentalData, derived: DerivedMetrics
) -> List[DataRecommendation]:
    recommendations = []

    if derived.soil_health.moisture_level == "Low":
        recommendations.append(DataRecommendation(
            type="Irrigation",
            priority="High",
            action="Increase irrigation frequency",
            impact="Improve soil moisture and crop yield",
            implementation="Apply 2-3mm daily for next 5 days",
        ))

    if derived.irrigation_needs.daily_requirement > 3:
        recommendations.append(DataRecommendation(
            type="Water Management",
            priority="Medium",
            action="Optimize irrigation timing",
            impact="Reduce water waste and improve efficiency",
            implementation="Irrigate during early morning hours",
        ))

    if data.power.temperature2m > 30:
        recommendations.append(DataRecommendation(
            type="Heat Management",
            priority="High",
            action="Implement heat stress mitigation",
            impact="Protect crops from heat damage",
            implementation="Increase irrigation and consider shade cloth",
        ))

    return recommendations
