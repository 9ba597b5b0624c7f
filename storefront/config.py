"""Configuration management."""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class DatabaseConfig:
    """Catalog database configuration."""

    # Full SQLAlchemy async URL wins over the SQLite path
    url: str = os.getenv("DATABASE_URL", "")
    path: str = os.getenv("DATABASE_PATH", "data/catalog.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class ApiConfig:
    """HTTP API configuration."""

    host: str = os.getenv("API_HOST", "0.0.0.0")
    port: int = int(os.getenv("API_PORT", "5000"))
    cors_origins: list[str] = field(
        default_factory=lambda: _split(os.getenv("CORS_ORIGINS", "*"))
    )
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


@dataclass
class ClientConfig:
    """Detail-view client configuration."""

    base_url: str = os.getenv("API_BASE_URL", "http://localhost:5000")
    timeout: float = float(os.getenv("CLIENT_TIMEOUT", "10"))
    store_path: str = os.getenv("STORE_PATH", "data/local_store.json")
    recently_viewed_limit: int = 6
    favorites_limit: int = 30


db_config = DatabaseConfig()
api_config = ApiConfig()
client_config = ClientConfig()
