"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"

    # App Version (format: a.bc.de - major.feature.patch)
    VERSION: str = "0.03.00"

    # Proxy/Load Balancer Settings
    # Set to True when running behind nginx/Cloudflare to trust X-Forwarded-For
    TRUST_PROXY_HEADERS: bool = False

    # Database
    DATABASE_URL: str

    # Session Token (supports key rotation)
    JWT_SECRET: str = "change-this-in-production"
    JWT_SECRET_PREVIOUS: str = ""  # Set during rotation, clear after
    JWT_EXPIRES_HOURS: int = 12

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Error Tracking (optional, set in production)
    SENTRY_DSN: str = ""

    # Shared counter store for rate limiting (unset = in-process counters)
    REDIS_URL: str = ""
    REDIS_MAX_CONNECTIONS: int = 20

    # Rate Limiting
    RATE_LIMIT_API: int = 120  # General API, requests per minute
    RATE_LIMIT_APPLICATIONS: int = 5  # Public applications per IP per window
    RATE_LIMIT_APPLICATIONS_WINDOW_SECONDS: int = 60 * 60
    RATE_LIMIT_CLICKS: int = 20  # Tracked clicks per IP per window
    RATE_LIMIT_CLICKS_WINDOW_SECONDS: int = 60 * 60
    RATE_LIMIT_SWEEP_THRESHOLD: int = 100  # Entries before an opportunistic sweep
    RATE_LIMIT_CLICK_SWEEP_SECONDS: int = 10 * 60

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def jwt_secrets(self) -> list[str]:
        """Returns list of valid secrets (current first, then previous if set)."""
        secrets = [self.JWT_SECRET]
        if self.JWT_SECRET_PREVIOUS:
            secrets.append(self.JWT_SECRET_PREVIOUS)
        return secrets


settings = Settings()
