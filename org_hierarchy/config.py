from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = "org-hierarchy"

    # Database
    DATABASE_URL: str = "postgresql+asyncpg://localhost:5432/org_hierarchy"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 10

    @field_validator('DATABASE_URL', mode='before')
    @classmethod
    def convert_database_url(cls, v: str) -> str:
        """Convert postgresql:// to postgresql+asyncpg:// for async support."""
        if v and v.startswith('postgresql://'):
            return v.replace('postgresql://', 'postgresql+asyncpg://', 1)
        return v

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    DOCS_ENABLED: bool = True

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Listing
    DEFAULT_PAGE_LIMIT: int = 50
    MAX_PAGE_LIMIT: int = 500

    # Quotas are reported by the usage endpoints; creates only enforce them when enabled
    ENFORCE_LIMITS: bool = False

    # Gateway principal headers
    REQUIRE_PRINCIPAL: bool = False

    # Subtree size (businesses + franchises) above which the hierarchy read logs a warning
    HIERARCHY_WARN_THRESHOLD: int = 1000

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @model_validator(mode="after")
    def disable_debug_in_production(self) -> "Settings":
        if self.is_production:
            self.DEBUG = False
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in ("production", "staging")

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def sqlalchemy_echo(self) -> bool:
        # SECURITY: never echo SQL (and bound parameters) outside development
        return self.DEBUG and not self.is_production and self.LOG_LEVEL.upper() == "DEBUG"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
