from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Backend API
    api_base_url: str = "http://localhost:3000"
    api_timeout_ms: int = 60_000  # generous for slow CI networks
    api_max_retries: int = 2
    api_retry_delay_ms: int = 1000

    # Logging
    log_level: str = "INFO"
    log_json: bool = False  # set True in production for structured JSON logs


class ClientConfig(BaseModel):
    """Transport configuration, read-only once built."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "http://localhost:3000"
    timeout_ms: int = Field(default=60_000, gt=0)
    max_retries: int = Field(default=2, ge=0)
    retry_delay_ms: int = Field(default=1000, ge=0)
    headers: dict[str, str] = Field(default_factory=lambda: {"Accept": "application/json"})

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ClientConfig":
        settings = settings or Settings()
        return cls(
            base_url=settings.api_base_url,
            timeout_ms=settings.api_timeout_ms,
            max_retries=settings.api_max_retries,
            retry_delay_ms=settings.api_retry_delay_ms,
        )
