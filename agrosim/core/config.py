from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "AgroSim Backend"
    APP_VERSION: str = "v1"

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Location used when a simulation request does not carry one (New York)
    DEFAULT_LATITUDE: float = 40.7128
    DEFAULT_LONGITUDE: float = -74.0060

    # When set, environmental data is fetched over HTTP instead of generated
    ENVIRONMENT_DATA_URL: Optional[str] = None
    ENVIRONMENT_DATA_TIMEOUT: float = 10.0

    RANDOM_SEED: Optional[int] = None

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
