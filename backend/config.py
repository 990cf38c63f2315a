"""Centralized configuration: every env var is read here."""

import os


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3001"))
        self.environment: str = os.getenv("ENVIRONMENT", "development")
        self.log_level: str = os.getenv("LOG_LEVEL", "info")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.cors_origins: list[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
            if origin.strip()
        ]

        # Content files (episodes.json, faq.json, about.md)
        self.content_dir: str = os.getenv("CONTENT_DIR", "content")

        # Response cache
        self.cache_ttl_seconds: float = float(os.getenv("CACHE_TTL_SECONDS", "300"))
        self.cache_sweep_interval_seconds: float = float(os.getenv("CACHE_SWEEP_INTERVAL_SECONDS", "300"))

        # Rate limiting
        self.rate_limit_requests: int = int(os.getenv("RATE_LIMIT_REQUESTS", "100"))
        self.rate_limit_window_seconds: float = float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
        self.rate_limit_sweep_interval_seconds: float = float(
            os.getenv("RATE_LIMIT_SWEEP_INTERVAL_SECONDS", "300")
        )
        self.trust_proxy_headers: bool = _env_bool("TRUST_PROXY_HEADERS")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Return the invalid settings (empty when all is well). The app refuses to start on any."""
        problems = []
        positive = {
            "CACHE_TTL_SECONDS": self.cache_ttl_seconds,
            "CACHE_SWEEP_INTERVAL_SECONDS": self.cache_sweep_interval_seconds,
            "RATE_LIMIT_REQUESTS": self.rate_limit_requests,
            "RATE_LIMIT_WINDOW_SECONDS": self.rate_limit_window_seconds,
            "RATE_LIMIT_SWEEP_INTERVAL_SECONDS": self.rate_limit_sweep_interval_seconds,
        }
        for name, value in positive.items():
            if value <= 0:
                problems.append(f"{name} must be positive (got {value})")
        return problems


settings = Settings()
