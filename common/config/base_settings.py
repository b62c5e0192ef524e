"""
Environment-backed settings shared by the API and the batch jobs.

Values come from the process environment first, then `.env`. Names are
case-sensitive and match the variable names exactly.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        WEEKLY_SUMMARY_CONCURRENCY: int = 25

    settings = Settings()
    settings.validate_required()
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """
    Connection, auth and server settings.

    App packages subclass this to add their own tunables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
        case_sensitive=True,
    )

    # ==========================================================================
    # MongoDB
    # ==========================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "mentalspace"
    MONGODB_MAX_POOL_SIZE: int = 10
    MONGODB_MIN_POOL_SIZE: int = 1

    # ==========================================================================
    # Bearer tokens (verified only; issued by the identity provider)
    # ==========================================================================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"

    # ==========================================================================
    # HTTP server
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production
    CORS_ORIGINS: str = "*"  # "*" or comma-separated origins
    CORS_ALLOW_CREDENTIALS: bool = True

    def get_cors_origins(self) -> List[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    def validate_required(self) -> None:
        """
        Fail fast at startup on settings the API cannot run without.

        Raises:
            ValueError: Listing every problem found
        """
        problems = []

        if not self.JWT_SECRET:
            problems.append("JWT_SECRET must be set to verify bearer tokens")
        if not self.MONGODB_URI.startswith(("mongodb://", "mongodb+srv://")):
            problems.append("MONGODB_URI must be a mongodb:// or mongodb+srv:// URI")
        if self.MONGODB_MIN_POOL_SIZE > self.MONGODB_MAX_POOL_SIZE:
            problems.append("MONGODB_MIN_POOL_SIZE cannot exceed MONGODB_MAX_POOL_SIZE")

        if problems:
            raise ValueError("Invalid configuration:\n" + "\n".join(f"  - {p}" for p in problems))
