"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with TRIPDESK_ prefix.
No YAML files, no file-based config — just env vars (12-factor app style).

Learn: The signing secret is the only value that must change between
environments. Everything else has a sane local default so `tripdesk serve`
works out of the box against a SQLite file.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """All app configuration. Set via TRIPDESK_* env vars."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./tripdesk.db"

    # Auth
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_rounds: int = 12

    # Session cookie
    session_cookie_name: str = "token"
    session_cookie_samesite: str = "lax"

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_prefix": "TRIPDESK_"}

    @property
    def session_cookie_secure(self) -> bool:
        """Only send the session cookie over HTTPS outside local development."""
        return self.environment != "development"

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure sensitive defaults are changed in non-development environments."""
        if (
            self.environment != "development"
            and self.jwt_secret == DEFAULT_JWT_SECRET
        ):
            raise ValueError(
                "TRIPDESK_JWT_SECRET must be set to a secure value in "
                "non-development environments. Generate one with: "
                'python -c "import secrets; print(secrets.token_urlsafe(32))"'
            )
        return self


# Singleton — import this everywhere
settings = Settings()
