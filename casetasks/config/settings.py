# casetasks/config/settings.py
# Runtime configuration, read once from the environment and passed around explicitly

import os
from typing import List, Optional

from dotenv import load_dotenv

from casetasks.errors import ConfigError

DEFAULT_DATABASE_URL = "sqlite:///./casetasks.db"


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings:
    """Application settings

    Construct directly in tests; use ``Settings.from_env()`` everywhere else.
    """

    def __init__(
        self,
        jwt_secret: str,
        database_url: str = DEFAULT_DATABASE_URL,
        jwt_algorithm: str = "HS256",
        token_expire_days: int = 7,
        bcrypt_rounds: int = 12,
        environment: str = "development",
        cors_origins: Optional[List[str]] = None,
        log_level: str = "INFO",
        database_sslmode: Optional[str] = None,
    ):
        if not jwt_secret:
            raise ConfigError("JWT_SECRET environment variable is required")
        if token_expire_days < 1:
            raise ConfigError("TOKEN_EXPIRE_DAYS must be at least 1")
        if not 4 <= bcrypt_rounds <= 31:
            raise ConfigError("BCRYPT_ROUNDS must be between 4 and 31")

        self.jwt_secret = jwt_secret
        self.database_url = database_url
        self.jwt_algorithm = jwt_algorithm
        self.token_expire_days = token_expire_days
        self.bcrypt_rounds = bcrypt_rounds
        self.environment = environment
        self.cors_origins = cors_origins if cors_origins is not None else ["http://localhost:3000"]
        self.log_level = log_level.upper()
        self.database_sslmode = database_sslmode

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from the process environment (and a .env file if present)"""
        load_dotenv()

        try:
            token_expire_days = int(os.getenv("TOKEN_EXPIRE_DAYS", "7"))
            bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", "12"))
        except ValueError as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e

        return cls(
            jwt_secret=os.getenv("JWT_SECRET", ""),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            token_expire_days=token_expire_days,
            bcrypt_rounds=bcrypt_rounds,
            environment=os.getenv("ENVIRONMENT", "development"),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "http://localhost:3000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            database_sslmode=os.getenv("DATABASE_SSLMODE") or None,
        )
