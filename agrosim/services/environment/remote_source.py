import requests

from agrosim.core.logger import get_logger
from agrosim.schemas.environment import EnvironmentalReport
from agrosim.services.environment.coordinates import validate_coordinates

logger = get_logger(__name__)


class RemoteEnvironmentSource:
    """Fetches an environmental report from another instance of the data endpoint."""

    def __init__(self, url: str, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    def fetch(
        self, latitude: float, longitude: float, dataset: str = "comprehensive"
    ) -> EnvironmentalReport:
        validate_coordinates(latitude, longitude)

        params = {"lat": latitude, "lon": longitude, "dataset": dataset}
        logger.info("Fetching environmental data from %s", self.url)

        response = requests.get(self.url, params=params, timeout=self.timeout)
        response.raise_for_status()

        return EnvironmentalReport.model_validate(response.json())
