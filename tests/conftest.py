from datetime import datetime, timezone

import numpy as np
import pytest
from fastapi.testclient import TestClient

from agrosim.main import app
from agrosim.schemas.environment import (
    DroughtReadings,
    EnvironmentalData,
    EnvironmentalReport,
    GpmReadings,
    Location,
    ModisReadings,
    PowerReadings,
    SmapReadings,
)
from agrosim.schemas.farm import FarmParameters
from agrosim.services.environment.provider import get_environment_source
from agrosim.services.environment.synthetic_source import SyntheticEnvironmentSource

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_environment(
    temperature=20.0,
    precipitation=15.0,
    root_zone=0.3,
    surface=0.3,
    ndvi=0.65,
    drought_category="None",
    soil_temperature=20.0,
):
    return EnvironmentalData(
        power=PowerReadings(
            temperature2m=temperature,
            precipitation=precipitation,
            solar_radiation=200.0,
            humidity=70.0,
            wind_speed=4.0,
        ),
        smap=SmapReadings(
            soil_moisture_surface=surface,
            soil_moisture_root_zone=root_zone,
            soil_temperature=soil_temperature,
        ),
        modis=ModisReadings(ndvi=ndvi, evi=0.5, lai=3.0, fpar=0.75),
        gpm=GpmReadings(precipitation_rate=2.5, precipitation_accumulation=50.0),
        drought=DroughtReadings(
            drought_index=0.1,
            drought_category=drought_category,
            soil_moisture_percentile=60.0,
        ),
    )


class FixedSource:
    def __init__(self, data):
        self.data = data
        self.calls = []

    def fetch(self, latitude, longitude, dataset="comprehensive"):
        self.calls.append((latitude, longitude))
        return EnvironmentalReport(
            source="fixed",
            location=Location(lat=latitude, lon=longitude),
            timestamp="2024-06-01T12:00:00.000Z",
            datasets=[],
            data=self.data,
        )


class FailingSource:
    def fetch(self, latitude, longitude, dataset="comprehensive"):
        raise RuntimeError("satellite feed unavailable")


@pytest.fixture
def environment():
    return make_environment()


@pytest.fixture
def params():
    return FarmParameters(
        irrigation_mm_per_day=5,
        fertilizer_kg_per_ha=15,
        livestock_density_per_ha=2,
        crop_type="Corn",
        soil_type="Loam",
    )


@pytest.fixture
def fixed_source(environment):
    return FixedSource(environment)


@pytest.fixture
def seeded_source():
    return SyntheticEnvironmentSource(
        rng=np.random.default_rng(42), clock=lambda: FIXED_NOW
    )


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_source():
    def _use(source):
        app.dependency_overrides[get_environment_source] = lambda: source
        return source

    yield _use
    app.dependency_overrides.clear()
