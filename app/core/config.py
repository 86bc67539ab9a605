# app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    APP_NAME: str = "Book Shuttles"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # DB
    DATABASE_URL: str = Field(default="sqlite:///./shuttles.db")  # e.g. mysql+pymysql://...

    # Auth / security
    SECRET_KEY: str = "change-me-in-env"
    JWT_ALGO: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12
    COOKIE_SECURE: bool = False  # set True behind HTTPS in prod

    # Signed bypass token ("system auth"); falls back to SECRET_KEY
    SYSTEM_AUTH_SECRET: str | None = None
    SYSTEM_AUTH_EXPIRE_HOURS: int = 24

    # Site / SEO
    SITE_URL: str = "http://127.0.0.1:8000"  # set to production domain in prod
    SITE_NAME: str = "BookShuttles.com"
    VIATOR_PARTNER_ID: str = "P00097086"
    CLOUDINARY_CLOUD_NAME: str = "dawjqh1qv"
    OG_BASE_IMAGE: str = "book_shuttles_logo_og_banner_lezyqm.png"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,  # allow DATABASE_URL or database_url, etc.
        extra="ignore",
    )

    @property
    def system_auth_secret(self) -> str:
        return self.SYSTEM_AUTH_SECRET or self.SECRET_KEY


settings = Settings()
