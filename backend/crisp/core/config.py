from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./crisp.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

settings = Settings()
