from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"  # "development" or "production"

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    # Unset means issued tokens carry no exp claim; sessions end on logout
    ACCESS_TOKEN_EXPIRE_MINUTES: Optional[int] = None

    DB_CONNECT_TIMEOUT: int = 10
    LIST_PER_PAGE: int = 10

    FACTORY_URL: str = "https://pizza-factory.cs329.click"
    FACTORY_API_KEY: str = ""
    FACTORY_TIMEOUT_SECONDS: float = 30.0

    ADMIN_NAME: str = "Pizza Admin"
    ADMIN_EMAIL: str = "a@jwt.com"
    ADMIN_PASSWORD: str = "admin"

    @property
    def is_production(self):
        return self.ENVIRONMENT == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
