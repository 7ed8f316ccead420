"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./finance.db"
    sql_echo: bool = False

    # Service
    service_name: str = "finance-tracker"
    log_level: str = "INFO"

    # Ledger rules
    max_installments: int = 120


settings = Settings()
