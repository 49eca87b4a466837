from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Landscape Takeoff"
    LOG_LEVEL: str = "INFO"

    # Tiers used when a request does not say which one it wants
    DEFAULT_SKILL_TIER: str = "pro"
    DEFAULT_BUDGET_TIER: str = "full"

    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()
