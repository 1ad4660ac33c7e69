import math
from datetime import datetime, timezone
from typing import Callable, Optional

import numpy as np

from agrosim.core.logger import get_logger
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
from agrosim.services.environment.coordinates import validate_coordinates
from agrosim.services.environment.derived import (
    derive_metrics,
    drought_category,
    report_insights,
    report_recommendations,
)

logger = get_logger(__name__)

SOURCE_NAME = "NASA Multi-Dataset Integration"

DATASETS = [
    "NASA POWER (Weather & Climate)",
    "SMAP (Soil Moisture)",
    "MODIS (Vegetation Health)",
    "GPM (Precipitation)",
    "U.S. Drought Monitor",
]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SyntheticEnvironmentSource:
    """
    Mock remote-sensing feed. Readings are drawn from `rng` and the
    air temperature follows a slow sine wave over `clock`, so a seeded
    generator and a fixed clock give a reproducible report.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock

    def _spread(self, base: float, width: float) -> float:
        return base + float(self.rng.random()) * width

    def readings(self, now: datetime) -> EnvironmentalData:
        epoch_ms = now.timestamp() * 1000
        drought_index = self._spread(0.3, 0.4)

        return EnvironmentalData(
            power=PowerReadings(
                temperature2m=22.5 + math.sin(epoch_ms / 1_000_000) * 5,
                precipitation=self._spread(15.2, 10),
                solar_radiation=self._spread(180, 50),
                humidity=self._spread(65, 20),
                wind_speed=self._spread(3.2, 2),
            ),
            smap=SmapReadings(
                soil_moisture_surface=self._spread(0.32, 0.1),
                soil_moisture_root_zone=self._spread(0.28, 0.08),
                soil_temperature=self._spread(18.5, 3),
            ),
            modis=ModisReadings(
                ndvi=self._spread(0.65, 0.15),
                evi=self._spread(0.45, 0.1),
                lai=self._spread(2.8, 0.5),
                fpar=self._spread(0.72, 0.1),
            ),
            gpm=GpmReadings(
                precipitation_rate=self._spread(2.1, 1.5),
                precipitation_accumulation=self._spread(45.3, 20),
            ),
            drought=DroughtReadings(
                drought_index=drought_index,
                drought_category=drought_category(drought_index),
                soil_moisture_percentile=self._spread(45, 30),
            ),
        )

    def fetch(
        self, latitude: float, longitude: float, dataset: str = "comprehensive"
    ) -> EnvironmentalReport:
        validate_coordinates(latitude, longitude)

        now = self.clock()
        data = self.readings(now)
        derived = derive_metrics(
            data,
            organic_matter=self._spread(2.5, 1.5),
            ph=self._spread(6.2, 0.8),
        )
        data = data.model_copy(update={"derived": derived})

        logger.debug(
            "Generated environmental data for (%s, %s), dataset=%s",
            latitude,
            longitude,
            dataset,
        )

        return EnvironmentalReport(
            source=SOURCE_NAME,
            location=Location(lat=latitude, lon=longitude),
            timestamp=format_timestamp(now),
            datasets=list(DATASETS),
            data=data,
            insights=report_insights(data, derived),
            recommendations=report_recommendations(data, derived),
        )
