from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = "sqlite:///./groupcart.db"

    # JWT Security
    SECRET_KEY: str = "change_me_in_env"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Application
    PROJECT_NAME: str = "GroupCart API"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Invite codes
    INVITE_CODE_LENGTH: int = 8
    INVITE_CODE_MAX_ATTEMPTS: int = 5

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


# Create a global settings instance
settings = Settings()
