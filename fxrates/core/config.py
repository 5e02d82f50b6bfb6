from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    rate_cache_ttl_seconds: float = Field(default=10.0, gt=0, validation_alias=AliasChoices('rate_cache_ttl_seconds', 'fx_cache_ttl'))
    rate_api_url: str = "https://open.er-api.com/v6/latest"
    rate_api_timeout: float = 10.0
    cors_origins: str = "http://localhost:3000"
    log_level: str = "INFO"


settings = Settings()
