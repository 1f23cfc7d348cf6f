from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    PORT: int = 5000
    DB_PATH: str = "data/linkup.db"
    LOG_LEVEL: str = "info"

    FETCH_TIMEOUT_SECONDS: float = 8.0
    FETCH_MAX_BYTES: int = 2_000_000
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    ENRICHMENT_TIMEOUT_SECONDS: float = 30.0
    DUPLICATE_THRESHOLD: float = 0.8


settings = Settings()
