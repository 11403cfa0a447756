"""Application configuration."""
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache


DEV_JWT_SECRET = "dev-jwt-secret-change-me"


class Settings(BaseSettings):
    """Application settings."""

    # App
    APP_NAME: str = "CIREC_Admin"
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Database
    DATABASE_URL: str = "sqlite:///./cirec_admin.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10

    # JWT
    JWT_SECRET_KEY: str = DEV_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Published files
    PUBLIC_DIR: str = "./public"
    NEWS_PDF_SUBDIR: str = "crpdfnet"
    CIS_NEWS_PDF_SUBDIR: str = "crpdfnet/cis"
    MAX_PDF_UPLOAD_SIZE: int = 10485760  # 10MB
    MAX_CIS_PDF_UPLOAD_SIZE: int = 20971520  # 20MB
    MAX_IMPORT_UPLOAD_SIZE: int = 20971520  # 20MB

    # Periodicals
    PERIODICAL_MIN_YEAR: int = 1998
    PERIODICAL_MAX_YEAR: int = 2050
    MONTHLY_NEWS_EPOCH_YEAR: int = 1991
    CIS_NEWS_EPOCH_YEAR: int = 2011
    ISSUE_EPOCH_YEAR: int = 1998
    ARTICLE_EPOCH_YEAR: int = 1998

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def news_pdf_dir(self) -> Path:
        return Path(self.PUBLIC_DIR) / self.NEWS_PDF_SUBDIR

    @property
    def cis_news_pdf_dir(self) -> Path:
        return Path(self.PUBLIC_DIR) / self.CIS_NEWS_PDF_SUBDIR


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
