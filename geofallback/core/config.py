# geofallback/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

IP_API_URL = "http://ip-api.com/json/?fields=status,message,country,countryCode,lat,lon"


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)
    ttl_cache: int = Field(default=30 * 60, gt=0)  # = TTL_CACHE (seconds)

    upstream_url: str = IP_API_URL
    upstream_timeout: float = Field(default=10.0, gt=0)

    # retry budget for a single refresh cycle
    retry_max: int = Field(default=6, ge=0)
    retry_initial_interval: float = Field(default=30.0, ge=0)
    retry_backoff_factor: float = Field(default=2.0, ge=1.0)

    refresh_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
        frozen=True,
    )
