# src/config/settings.py
import os
import logging
from dataclasses import dataclass
from dotenv import load_dotenv
from typing import Optional

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

OPERATION_MODES = ("MOCKUP", "DEV", "PROD")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection settings for the DEV/PROD database backend."""
    host: str
    port: int
    database: str
    username: str
    password: str
    pool_min: Optional[int] = None
    pool_max: Optional[int] = None
    ssl: bool = False
    ssl_reject_unauthorized: bool = True


def _get_int(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'.")


def _get_mode() -> str:
    mode = os.getenv("MODE", "MOCKUP").upper()
    if mode not in OPERATION_MODES:
        logger.warning(f"Unknown MODE '{mode}', falling back to MOCKUP.")
        return "MOCKUP"
    return mode


def _load_database_settings(mode: str) -> Optional[DatabaseSettings]:
    if mode == "DEV":
        return DatabaseSettings(
            host=os.getenv("DEV_DB_HOST", "localhost"),
            port=_get_int("DEV_DB_PORT", 5432),
            database=os.getenv("DEV_DB_NAME", "delivery_dev"),
            username=os.getenv("DEV_DB_USER", "dev_user"),
            password=os.getenv("DEV_DB_PASSWORD", "dev_password"),
            pool_min=_get_int("DB_POOL_MIN"),
            pool_max=_get_int("DB_POOL_MAX"),
        )
    if mode == "PROD":
        return DatabaseSettings(
            host=os.getenv("PROD_DB_HOST", "localhost"),
            port=_get_int("PROD_DB_PORT", 5432),
            database=os.getenv("PROD_DB_NAME", "delivery_prod"),
            username=os.getenv("PROD_DB_USER", "prod_user"),
            password=os.getenv("PROD_DB_PASSWORD", ""),
            pool_min=_get_int("DB_POOL_MIN"),
            pool_max=_get_int("DB_POOL_MAX"),
            ssl=os.getenv("DB_SSL", "false").lower() == "true",
            ssl_reject_unauthorized=os.getenv("DB_SSL_REJECT_UNAUTHORIZED", "true").lower() != "false",
        )
    return None


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # Operation mode selects the storage backend: MOCKUP, DEV or PROD
        self.MODE: str = _get_mode()

        self.RETENTION_DAYS: int = _get_int("RETENTION_DAYS", 30)
        self.RETENTION_SWEEP_INTERVAL_HOURS: int = _get_int("RETENTION_SWEEP_INTERVAL_HOURS", 24)

        self.HTTP_HOST: str = os.getenv("HTTP_HOST", "0.0.0.0")
        self.HTTP_PORT: int = _get_int("HTTP_PORT", 5000)

        # Verbose logging outside production
        default_level = "WARNING" if self.MODE == "PROD" else "DEBUG"
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", default_level).upper()

        self.MOCK_DATA_SEED: int = _get_int("MOCK_DATA_SEED", 12345)
        self.DATABASE: Optional[DatabaseSettings] = _load_database_settings(self.MODE)

        self._validate()

        logger.info("Settings loaded.")
        logger.info(f"Mode: {self.MODE}")
        logger.info(f"Retention Days: {self.RETENTION_DAYS}")
        logger.info(f"Log Level: {self.LOG_LEVEL}")
        if self.MODE == "MOCKUP":
            logger.info(f"Mock Data Seed: {self.MOCK_DATA_SEED}")
        elif self.DATABASE:
            logger.info(
                f"Database: {self.DATABASE.host}:{self.DATABASE.port}/{self.DATABASE.database} "
                f"(user={self.DATABASE.username}, password={'***' if self.DATABASE.password else '<empty>'})"
            )

    def _validate(self) -> None:
        problems = []
        if not 1 <= self.RETENTION_DAYS <= 365:
            problems.append(f"RETENTION_DAYS must be between 1 and 365, got {self.RETENTION_DAYS}")
        if self.RETENTION_SWEEP_INTERVAL_HOURS < 1:
            problems.append(
                f"RETENTION_SWEEP_INTERVAL_HOURS must be at least 1, got {self.RETENTION_SWEEP_INTERVAL_HOURS}")
        if not 1 <= self.HTTP_PORT <= 65535:
            problems.append(f"HTTP_PORT must be between 1 and 65535, got {self.HTTP_PORT}")
        if self.LOG_LEVEL not in LOG_LEVELS:
            problems.append(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.LOG_LEVEL}")
        if self.MOCK_DATA_SEED <= 0:
            problems.append(f"MOCK_DATA_SEED must be a positive integer, got {self.MOCK_DATA_SEED}")

        db = self.DATABASE
        if db is not None:
            if not db.host or not db.database or not db.username:
                problems.append("Database host, name and user must not be empty")
            if not 1 <= db.port <= 65535:
                problems.append(f"Database port must be between 1 and 65535, got {db.port}")
            if db.pool_min is not None and db.pool_min < 1:
                problems.append(f"DB_POOL_MIN must be at least 1, got {db.pool_min}")
            if db.pool_max is not None and db.pool_max < 1:
                problems.append(f"DB_POOL_MAX must be at least 1, got {db.pool_max}")

        if problems:
            message = "; ".join(problems)
            logger.critical(f"Invalid configuration: {message}")
            raise ValueError(f"Invalid configuration: {message}")

    @property
    def is_debug_mode(self) -> bool:
        return self.MODE in ("MOCKUP", "DEV")


# Single instance of settings to be imported by other modules
settings = Settings()
