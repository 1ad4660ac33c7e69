from typing import Union

import numpy as np

from agrosim.core.config import settings
from agrosim.services.environment.remote_source import RemoteEnvironmentSource
from agrosim.services.environment.synthetic_source import SyntheticEnvironmentSource

EnvironmentSource = Union[SyntheticEnvironmentSource, RemoteEnvironmentSource]


def get_environment_source() -> EnvironmentSource:
    """FastAPI dependency; a fresh source per request keeps generators unshared."""
    if settings.ENVIRONMENT_DATA_URL:
        return RemoteEnvironmentSource(
            settings.ENVIRONMENT_DATA_URL,
            timeout=settings.ENVIRONMENT_DATA_TIMEOUT,
        )

    return SyntheticEnvironmentSource(rng=np.random.default_rng(settings.RANDOM_SEED))
