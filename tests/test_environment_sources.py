import math
from datetime import datetime, timezone

import numpy as np
import pytest
import requests

from agrosim.core.errors import InvalidInput
from agrosim.schemas.environment import EnvironmentalReport
from agrosim.services.environment import remote_source
from agrosim.services.environment.derived import (
    crop_stress,
    derive_metrics,
    drought_category,
    irrigation_needs,
    report_insights,
    report_recommendations,
    soil_health,
    water_balance,
)
from agrosim.services.environment.remote_source import RemoteEnvironmentSource
from agrosim.services.environment.synthetic_source import SyntheticEnvironmentSource

from conftest import FIXED_NOW, make_environment


def test_seeded_source_is_reproducible():
    first = SyntheticEnvironmentSource(np.random.default_rng(7), clock=lambda: FIXED_NOW)
    second = SyntheticEnvironmentSource(np.random.default_rng(7), clock=lambda: FIXED_NOW)

    assert first.fetch(10, 20) == second.fetch(10, 20)


def test_report_shape(seeded_source):
    report = seeded_source.fetch(40.7128, -74.006)

    assert report.source == "NASA Multi-Dataset Integration"
    assert report.location.lat == 40.7128
    assert report.timestamp == "2024-06-01T12:00:00.000Z"
    assert len(report.datasets) == 5
    assert report.data.derived is not None


def test_readings_stay_in_generator_ranges(seeded_source):
    for _ in range(20):
        data = seeded_source.fetch(0, 0).data

        assert 0.65 <= data.modis.ndvi < 0.8
        assert 0.28 <= data.smap.soil_moisture_root_zone < 0.36
        assert 15.2 <= data.power.precipitation < 25.2
        assert 17.5 <= data.power.temperature2m <= 27.5
        assert data.drought.drought_category == drought_category(data.drought.drought_index)


def test_temperature_follows_clock():
    moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
    source = SyntheticEnvironmentSource(np.random.default_rng(0), clock=lambda: moment)

    expected = 22.5 + math.sin(moment.timestamp() * 1000 / 1_000_000) * 5
    assert source.fetch(0, 0).data.power.temperature2m == pytest.approx(expected)


@pytest.mark.parametrize(
    "index, category",
    [
        (0.1, "None"),
        (0.25, "Abnormally Dry"),
        (0.35, "Moderate Drought"),
        (0.45, "Severe Drought"),
        (0.55, "Extreme Drought"),
        (0.65, "Exceptional Drought"),
    ],
)
def test_drought_category(index, category):
    assert drought_category(index) == category


def test_irrigation_needs_for_hot_dry_weather():
    needs = irrigation_needs(make_environment(temperature=40, precipitation=0))

    assert needs.daily_requirement == pytest.approx(4.8)
    assert needs.weekly_requirement == pytest.approx(33.6)
    assert needs.water_stress == "High"
    assert needs.recommended_method == "Sprinkler"


@pytest.mark.parametrize(
    "lat, lon",
    [(float("nan"), 0), (0, float("inf")), (91, 0), (0, -181)],
)
def test_invalid_coordinates_rejected(seeded_source, lat, lon):
    with pytest.raises(InvalidInput):
        seeded_source.fetch(lat, lon)


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self.payload


def test_remote_source_parses_report(monkeypatch, seeded_source):
    payload = seeded_source.fetch(12.5, 30).model_dump(by_alias=True)
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append((url, params, timeout))
        return FakeResponse(payload)

    monkeypatch.setattr(remote_source.requests, "get", fake_get)

    report = RemoteEnvironmentSource("http://data.local/api/v1/nasaData", timeout=3).fetch(12.5, 30)

    assert isinstance(report, EnvironmentalReport)
    assert report.data.modis.ndvi == payload["data"]["modis"]["ndvi"]
    assert calls == [
        (
            "http://data.local/api/v1/nasaData",
            {"lat": 12.5, "lon": 30, "dataset": "comprehensive"},
            3,
        )
    ]


def test_remote_source_propagates_http_errors(monkeypatch):
    monkeypatch.setattr(
        remote_source.requests, "get", lambda *args, **kwargs: FakeResponse({}, 503)
    )

    with pytest.raises(requests.HTTPError):
        RemoteEnvironmentSource("http://data.local").fetch(0, 0)


HOT = "High temperatures detected - consider shade management and increased irrigation"
DRY = "Soil moisture is below optimal levels - irrigation recommended"
LUSH = "Vegetation health is excellent - current management practices are effective"
DEMAND = "High irrigation demand detected - monitor water usage efficiency"
STRESSED = "Crop stress levels are elevated - review management practices"


def with_derived(**kwargs):
    data = make_environment(**kwargs)
    return data, derive_metrics(data, organic_matter=3.0, ph=6.5)


@pytest.mark.parametrize(
    "env_kwargs, stress, heat, cold, water, vegetation",
    [
        ({}, 0, "Low", "Low", "Low", "Good"),
        ({"temperature": 30}, 0, "Moderate", "Low", "Low", "Good"),
        ({"temperature": 31}, 20, "High", "Low", "Low", "Good"),
        ({"temperature": 10}, 0, "Low", "Moderate", "Low", "Good"),
        ({"temperature": 9}, 15, "Low", "High", "Low", "Good"),
        ({"root_zone": 0.25}, 0, "Low", "Low", "Low", "Good"),
        ({"root_zone": 0.2}, 0, "Low", "Low", "Moderate", "Good"),
        ({"root_zone": 0.19}, 25, "Low", "Low", "High", "Good"),
        ({"ndvi": 0.5}, 0, "Low", "Low", "Low", "Poor"),
        ({"ndvi": 0.49}, 20, "Low", "Low", "Low", "Poor"),
        ({"ndvi": 0.71}, 0, "Low", "Low", "Low", "Excellent"),
        ({"temperature": 31, "root_zone": 0.1, "ndvi": 0.4}, 65, "High", "Low", "High", "Poor"),
    ],
)
def test_crop_stress(env_kwargs, stress, heat, cold, water, vegetation):
    result = crop_stress(make_environment(**env_kwargs))

    assert result.overall_stress == stress
    assert result.heat_stress == heat
    assert result.cold_stress == cold
    assert result.water_stress == water
    assert result.vegetation_health == vegetation


@pytest.mark.parametrize(
    "precipitation, runoff",
    [(10, "Low"), (11, "Moderate"), (20, "Moderate"), (21, "High")],
)
def test_water_balance(precipitation, runoff):
    balance = water_balance(make_environment(temperature=20, precipitation=precipitation))

    assert balance.inflow == precipitation
    assert balance.outflow == pytest.approx(4)
    assert balance.net_balance == pytest.approx(precipitation - 4)
    assert balance.soil_storage == pytest.approx(30)
    assert balance.runoff_risk == runoff


@pytest.mark.parametrize(
    "root_zone, level",
    [(0.31, "Optimal"), (0.3, "Moderate"), (0.21, "Moderate"), (0.2, "Low")],
)
def test_soil_health_moisture_level(root_zone, level):
    assert soil_health(make_environment(root_zone=root_zone), 3.0, 6.5).moisture_level == level


@pytest.mark.parametrize(
    "soil_temperature, status",
    [(26, "Hot"), (25, "Optimal"), (15, "Optimal"), (14, "Cold")],
)
def test_soil_health_temperature_status(soil_temperature, status):
    data = make_environment(soil_temperature=soil_temperature)

    assert soil_health(data, 3.0, 6.5).temperature_status == status


def test_soil_health_score():
    capped = soil_health(make_environment(), 3.0, 6.5)
    poor = soil_health(make_environment(root_zone=0.1, ndvi=0.5, soil_temperature=30), 2.8, 6.4)

    assert capped.score == 100
    # 10 + (25 - 10) * 2 + 25
    assert poor.score == pytest.approx(65)
    assert poor.organic_matter == 2.8
    assert poor.ph == 6.4
    assert poor.nutrient_level == "Moderate"


@pytest.mark.parametrize(
    "env_kwargs, expected",
    [
        ({}, []),
        ({"temperature": 28}, []),
        ({"temperature": 28.5}, [HOT]),
        ({"root_zone": 0.25}, []),
        ({"root_zone": 0.24}, [DRY]),
        ({"ndvi": 0.7}, []),
        ({"ndvi": 0.71}, [LUSH]),
        # daily requirement 4.8 vs 5.2
        ({"temperature": 40, "precipitation": 0}, [HOT]),
        ({"temperature": 45, "precipitation": 0}, [HOT, DEMAND]),
        # overall stress 45 vs 65
        ({"root_zone": 0.1, "ndvi": 0.4}, [DRY]),
        ({"temperature": 31, "root_zone": 0.1, "ndvi": 0.4}, [HOT, DRY, STRESSED]),
    ],
)
def test_report_insights(env_kwargs, expected):
    data, derived = with_derived(**env_kwargs)

    assert report_insights(data, derived) == expected


@pytest.mark.parametrize(
    "env_kwargs, expected",
    [
        ({}, []),
        ({"root_zone": 0.21}, []),
        ({"root_zone": 0.2}, ["Irrigation"]),
        # daily requirement 2.8 vs 3.2
        ({"precipitation": 0.5}, []),
        ({"precipitation": 0}, ["Water Management"]),
        ({"temperature": 30}, []),
        ({"temperature": 31}, ["Heat Management"]),
        ({"temperature": 31, "precipitation": 0, "root_zone": 0.1}, ["Irrigation", "Water Management", "Heat Management"]),
    ],
)
def test_report_recommendations(env_kwargs, expected):
    data, derived = with_derived(**env_kwargs)
    recommendations = report_recommendations(data, derived)

    assert [r.type for r in recommendations] == expected
    for recommendation in recommendations:
        expected_priority = "Medium" if recommendation.type == "Water Management" else "High"
        assert recommendation.priority == expected_priority
