from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    APP_NAME: str = "Cost Per Wear Analytics"
    APP_ENV: str = "dev"
    DATABASE_URL: str = "sqlite:///./wardrobe.db"
    # Formatting
    CURRENCY_CODE: str = "USD"
    # Calendar days are bucketed in this zone
    TIMEZONE: str = "UTC"
    # Analytics thresholds
    UNUSED_ITEM_DAYS: int = 30
    STREAK_LOOKBACK_DAYS: int = 365
    TOP_EFFICIENT_LIMIT: int = 10
    WORST_INVESTMENTS_LIMIT: int = 5
    EFFICIENT_SCORE_THRESHOLD: float = 40.0

settings = Settings()
