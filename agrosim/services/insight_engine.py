"""
Rule tables turning farm parameters, environmental readings and scores
into human-readable insights and prioritized recommendations.

Insight rules are grouped; groups are evaluated in order and only the
first matching rule of a group contributes. Recommendation rules are
independent of each other.
"""
from typing import Callable, List, NamedTuple, Union

from agrosim.schemas.environment import EnvironmentalData
from agrosim.schemas.farm import FarmParameters
from agrosim.schemas.simulation import Priority, Recommendation


class InsightRule(NamedTuple):
    predicate: Callable[[FarmParameters, EnvironmentalData], bool]
    message: Union[str, Callable[[FarmParameters, EnvironmentalData], str]]

    def render(self, params: FarmParameters, env: EnvironmentalData) -> str:
        if callable(self.message):
            return self.message(params, env)
        return self.message


class RecommendationRule(NamedTuple):
    predicate: Callable[[FarmParameters, object], bool]
    recommendation: Recommendation


def _drought_message(params, env):
    return (
        f"Drought conditions detected ({env.drought.drought_category})"
        " - prioritize water conservation"
    )


# =========================
# INSIGHT RULES
# =========================
INSIGHT_RULES = (
    # irrigation
    (
        InsightRule(
            lambda p, e: p.irrigation_mm_per_day > 8,
            "High irrigation levels detected - consider water conservation strategies",
        ),
        InsightRule(
            lambda p, e: p.irrigation_mm_per_day < 3,
            "Low irrigation may limit crop growth - monitor soil moisture closely",
        ),
    ),
    # fertilizer
    (
        InsightRule(
            lambda p, e: p.fertilizer_kg_per_ha > 25,
            "High fertilizer use may cause nutrient runoff and soil degradation",
        ),
        InsightRule(
            lambda p, e: p.fertilizer_kg_per_ha < 10,
            "Consider soil testing to optimize fertilizer application",
        ),
    ),
    # livestock
    (
        InsightRule(
            lambda p, e: p.livestock_density_per_ha > 4,
            "High livestock density increases soil compaction risk",
        ),
        InsightRule(
            lambda p, e: p.livestock_density_per_ha > 0,
            "Livestock can provide natural fertilizer through manure",
        ),
    ),
    # drought
    (
        InsightRule(
            lambda p, e: e.drought.drought_category != "None",
            _drought_message,
        ),
    ),
    # vegetation
    (
        InsightRule(
            lambda p, e: e.modis.ndvi > 0.7,
            "Excellent vegetation health detected - current practices are effective",
        ),
    ),
)


# =========================
# RECOMMENDATION RULES
# =========================
RECOMMENDATION_RULES = (
    RecommendationRule(
        lambda p, s: s.water_efficiency < 70,
        Recommendation(
            category="Water Management",
            priority=Priority.HIGH,
            action="Optimize irrigation schedule",
            impact="Improve water efficiency by 15-20%",
            implementation="Use soil moisture sensors and irrigate during early morning",
        ),
    ),
    RecommendationRule(
        lambda p, s: p.fertilizer_kg_per_ha > 20,
        Recommendation(
            category="Nutrient Management",
            priority=Priority.MEDIUM,
            action="Reduce fertilizer application",
            impact="Lower costs and reduce environmental impact",
            implementation="Conduct soil test and apply fertilizer based on crop needs",
        ),
    ),
    RecommendationRule(
        lambda p, s: p.livestock_density_per_ha > 3,
        Recommendation(
            category="Livestock Management",
            priority=Priority.MEDIUM,
            action="Implement rotational grazing",
            impact="Reduce soil compaction and improve pasture health",
            implementation="Rotate livestock every 7-14 days to allow pasture recovery",
        ),
    ),
)


def generate_insights(
    params: FarmParameters, env: EnvironmentalData
) -> List[str]:
    insights = []
    for group in INSIGHT_RULES:
        for rule in group:
            if rule.predicate(params, env):
                insights.append(rule.render(params, env))
                break
    return insights


def generate_recommendations(params: FarmParameters, scores) -> List[Recommendation]:
    """
    `scores` is anything exposing the raw score attributes
    (yield_score, sustainability, soil_health, water_efficiency).
    """
    return [
        rule.recommendation.model_copy()
        for rule in RECOMMENDATION_RULES
        if rule.predicate(params, scores)
    ]
