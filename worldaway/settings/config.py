from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env"""

    # API settings
    api_host: str = Field(default="0.0.0.0", env="API_HOST")
    api_port: int = Field(default=8000, env="API_PORT")
    api_reload: bool = Field(default=False, env="API_RELOAD")
    debug: bool = Field(default=False, env="DEBUG")

    # Database settings
    database_url: str = Field(
        default="sqlite:///./a_world_away.db",
        env="DATABASE_URL"
    )

    # Log settings
    log_level: str = Field(default="info", env="LOG_LEVEL")

    # CORS settings
    cors_origins: list[str] = Field(default=["*"], env="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, env="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], env="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], env="CORS_ALLOW_HEADERS")

    # Classifier settings
    classifier_seed: Optional[int] = Field(default=None, env="CLASSIFIER_SEED")

    # Upload settings
    max_upload_size: int = Field(default=10 * 1024 * 1024, env="MAX_UPLOAD_SIZE")  # 10MB
    allowed_file_types: list[str] = Field(default=["csv"], env="ALLOWED_FILE_TYPES")

    # Processing settings
    max_batch_size: int = Field(default=1000, env="MAX_BATCH_SIZE")
    history_limit: int = Field(default=20, env="HISTORY_LIMIT")

    # Development settings
    enable_docs: bool = Field(default=True, env="ENABLE_DOCS")
    enable_redoc: bool = Field(default=True, env="ENABLE_REDOC")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_in_memory_sqlite(self) -> bool:
        return self.database_url in ("sqlite://", "sqlite:///:memory:")

    def get_cors_config(self) -> dict:
        """Return the CORS middleware configuration"""
        return {
            "allow_origins": self.cors_origins,
            "allow_credentials": self.cors_allow_credentials,
            "allow_methods": self.cors_allow_methods,
            "allow_headers": self.cors_allow_headers,
        }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Dependency to get settings"""
    return settings
