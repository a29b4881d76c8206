"""Configuration management for the tool runtime."""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
# This ensures dotenv works regardless of where the script is run from
project_root = Path(__file__).parent.parent.parent
env_file = project_root / ".env"

# override=False means existing environment variables take precedence
load_dotenv(dotenv_path=env_file, override=False)


PRODUCTION_ENVIRONMENTS = ("production", "prod")


class Config:
    """Application configuration."""
    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
    LOG_JSON: bool = os.getenv("LOG_JSON", "true").lower() == "true"

    def is_production(self) -> bool:
        """Whether the current environment should hide developer diagnostics."""
        return self.APP_ENV.lower() in PRODUCTION_ENVIRONMENTS


config = Config()
