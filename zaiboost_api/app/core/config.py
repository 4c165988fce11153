"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  A ``.env`` file in the working directory is loaded first (via
``python-dotenv``) so local development does not need exported variables.

The two secrets, ``JWT_SECRET`` and ``ENCRYPTION_KEY``, have no defaults.
``Settings.validate`` raises when either is missing and the application
factory calls it, so a misconfigured deployment refuses to start instead
of signing tokens with a well-known key.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(".env.local")
load_dotenv()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "ZaiBoost API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    jwt_secret: str = os.getenv("JWT_SECRET", "")
    encryption_key: str = os.getenv("ENCRYPTION_KEY", "")
    token_expire_hours: int = int(os.getenv("TOKEN_EXPIRE_HOURS", "72"))

    # Path of the JSON snapshot file.  Relative paths are resolved against
    # the project root by ``core.store``.
    data_path: str = os.getenv("DATA_PATH", "zaiboost.db.json")

    # Password given to the ``admin`` account when it is seeded on first
    # start.  Change it right away with ``reset_password.py``.
    admin_password: str = os.getenv("ADMIN_PASSWORD", "admin123")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    def validate(self) -> None:
        """Raise ``RuntimeError`` if a required secret is not configured."""
        missing = [
            name
            for name, value in (
                ("JWT_SECRET", self.jwt_secret),
                ("ENCRYPTION_KEY", self.encryption_key),
            )
            if not value
        ]
        if missing:
            raise RuntimeError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Set them in the environment or in a .env file."
            )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class creation time, environment variables should
# be set before importing this module.
settings = Settings()
