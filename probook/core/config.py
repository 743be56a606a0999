from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "ProBook"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "json"  # "json" or "memory"
    BOOKINGS_DATA_DIR: str = "./data"
    BOOKINGS_STORAGE_KEY: str = "probook_bookings_v1"

    SEED_DEMO_DATA: bool = False
    LOG_CONFLICT_OVERRIDES: bool = True


settings = Settings()
