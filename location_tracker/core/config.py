# location_tracker/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path

class Settings(BaseSettings):
    app_name: str = Field(default="Location Tracker API", alias="APP_NAME")
    app_env: str = Field(default="dev", alias="APP_ENV")

    # Persistencia
    database_url: str = Field(default="sqlite:///./location_tracker.db", alias="DATABASE_URL")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # Observabilidad / HTTP
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # Radio medio terrestre (IUGG R1) usado por haversine
    earth_radius_m: float = Field(default=6_371_008.8, alias="EARTH_RADIUS_M")

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[1] / ".env"),  # location_tracker/.env
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

settings = Settings()
