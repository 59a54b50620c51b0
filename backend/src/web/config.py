"""
Web Configuration - Centralized settings management
"""
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

from ..db.base import DatabaseSettings

# Load backend/.env if present
_backend_env = Path(__file__).parent.parent.parent / ".env"
if _backend_env.exists():
    load_dotenv(_backend_env)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class AppConfig(BaseModel):
    """Application configuration with environment variable support"""

    app_name: str = "Todo Tracker"
    version: str = "1.0.0"

    # Server settings
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # Persistence
    project_root: Path = Path(__file__).parent.parent.parent.parent
    database_url: str = f"sqlite:///{project_root / 'data' / 'todos.db'}"

    # Rate limiting (slowapi)
    rate_limit_enabled: bool = True
    rate_limit: str = "60/minute"

    # Client settings
    api_url: str = "http://127.0.0.1:8000"
    client_timeout: float = 10.0

    @property
    def database(self) -> DatabaseSettings:
        return DatabaseSettings(url=self.database_url)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables"""
        defaults = cls()
        return cls(
            host=os.getenv("TODO_HOST", defaults.host),
            port=int(os.getenv("TODO_PORT", str(defaults.port))),
            debug=_env_flag("TODO_DEBUG", "0"),
            log_level=os.getenv("TODO_LOG_LEVEL", defaults.log_level).upper(),
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            rate_limit_enabled=_env_flag("TODO_RATE_LIMIT_ENABLED", "1"),
            rate_limit=os.getenv("TODO_RATE_LIMIT", defaults.rate_limit),
            api_url=os.getenv("TODO_API_URL", defaults.api_url),
            client_timeout=float(os.getenv("TODO_CLIENT_TIMEOUT", str(defaults.client_timeout))),
        )


# Global config instance
config = AppConfig.from_env()
