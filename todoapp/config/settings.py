# todoapp/config/settings.py
# Environment-driven configuration for the API, CORS, rate limiting and storage

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class Settings:
    """Application configuration read from the environment"""

    def __init__(self):
        self.ENVIRONMENT = os.getenv("ENVIRONMENT", "production").lower()
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        self.DATABASE = {
            "url": os.getenv("DATABASE_URL", "sqlite:///./todoapp.db"),
            "echo": _env_bool("DATABASE_ECHO", "false"),
        }

        # Front-end origins allowed to call the API
        self.CORS = {
            "allow_origins": _env_list(
                "CORS_ORIGINS",
                "http://localhost:5173,http://localhost:62119,https://localhost:62119",
            ),
            "allow_credentials": True,
        }

        # Fixed window per client address
        self.RATE_LIMITS = {
            "enabled": _env_bool("RATE_LIMIT_ENABLED", "true"),
            "requests_per_window": int(os.getenv("RATE_LIMIT_REQUESTS", 60)),
            "window_seconds": float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", 60)),
            "queue_limit": int(os.getenv("RATE_LIMIT_QUEUE_LIMIT", 10)),
        }

        self.STATIC = {
            "directory": os.getenv("STATIC_DIR", "wwwroot"),
            "index_file": "index.html",
        }

        self.SEED = {
            "admin_username": os.getenv("SEED_ADMIN_USERNAME", "admin"),
            "admin_password": os.getenv("SEED_ADMIN_PASSWORD", "admin123"),
        }

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"


settings = Settings()
