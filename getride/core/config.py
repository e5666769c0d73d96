from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "local"
    APP_NAME: str = "GEtRide"

    # JSON resource server base URL (e.g. http://192.168.1.10:3000)
    API_URL: str = "http://localhost:3000"

    @field_validator("API_URL", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are joined as base + "/resource", so a trailing slash would double up."""
        return v.strip().rstrip("/")

    REQUEST_TIMEOUT_SECONDS: float = 5.0

    # Durable client state (the logged-in user id)
    STORAGE_PATH: str = "./data/storage.json"
    SESSION_STORAGE_KEY: str = "userId"

    # If True, bookings whose vehicle cannot be fetched are returned without it instead of failing the list
    BOOKINGS_BEST_EFFORT: bool = False

    LOG_LEVEL: str = "INFO"


settings = Settings()
