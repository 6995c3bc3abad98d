"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    acquiring_bank_url: str  # required: the gateway cannot start without a bank
    bank_timeout_seconds: float = 10.0
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
