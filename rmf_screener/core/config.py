from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from functools import lru_cache

load_dotenv()


class Settings(BaseSettings):
    """
    Application configuration settings (Pydantic v2 style)
    """

    # Application settings
    APP_NAME: str = "RMF Screener"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"

    # Fund data source
    FUND_DATA_PATH: Optional[str] = None
    FUND_DATA_URL: str = "http://localhost:3000/data/jsonformatter.json"
    FUND_DATA_TIMEOUT: int = 30
    FUND_DATA_RETRIES: int = 3

    # Pagination
    DEFAULT_PAGE_SIZE: int = 30
    MAX_PAGE_SIZE: int = 200

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'LOG_LEVEL must be one of: {valid_levels}')
        return v.upper()

    @field_validator('FUND_DATA_URL')
    @classmethod
    def validate_fund_data_url(cls, v):
        if not v.startswith(('http://', 'https://')):
            raise ValueError('FUND_DATA_URL must start with http:// or https://')
        return v

    @field_validator('DEFAULT_PAGE_SIZE', 'MAX_PAGE_SIZE', 'FUND_DATA_RETRIES')
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError('must be a positive integer')
        return v


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
