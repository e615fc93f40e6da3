from functools import lru_cache
from pydantic import HttpUrl, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_comma_separated_origins(comma_list: str) -> list[HttpUrl]:
    """
    Split `BACKEND_CORS_ORIGINS` into validated URLs.

    Blank entries are skipped, so a trailing comma is harmless.

    Raises:
        ValueError: Naming the first origin that is not a valid http(s) URL.
    """
    if not comma_list:
        return []
    origins = []
    for raw in comma_list.split(","):
        candidate = raw.strip()
        if not candidate:
            continue
        try:
            origins.append(HttpUrl(candidate))
        except Exception as e:
            raise ValueError(f"Invalid CORS origin '{candidate}': {e}") from e
    return origins


class Settings(BaseSettings):
    DATABASE_URL: str
    # Shared secret of the identity provider that issues the bearer tokens
    JWT_SECRET: SecretStr
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"
    BACKEND_CORS_ORIGINS: str = ""
    ENVIRONMENT: str = "development"

    # Administrators: this exact address, or any address on the subdomain
    ADMIN_EMAIL: str = "admin@opencycle.com"
    ADMIN_EMAIL_DOMAIN: str = "admin.opencycle.com"

    # Per-metric deadline, also used as the PostgreSQL statement_timeout
    ANALYTICS_QUERY_TIMEOUT_SECONDS: float = 5.0
    ANALYTICS_DEFAULT_DAYS: int = 30

    # Values from the environment win over the optional .env file
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Return the process-wide settings, read once from the environment and `.env`.

    Tests that change environment variables call `get_settings.cache_clear()`.
    """
    return Settings()
