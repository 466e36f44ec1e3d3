from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./readiness.db"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    # Blob slot holding the serialized check-in collection.
    CHECKIN_STORAGE_KEY: str = "dailyCheckIns"
    CHECKIN_NAMESPACE: str = "default"

    # IANA zone name used for calendar-day comparisons.
    # Empty means the host's local timezone.
    CALENDAR_TIMEZONE: str = ""

    RECENT_DEFAULT_COUNT: int = 7

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
