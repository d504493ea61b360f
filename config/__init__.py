import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
basedir = Path(__file__).parent
load_dotenv(basedir.parent / ".env")

DEFAULT_STYLE_URL = "https://demotiles.maplibre.org/style.json"


class Config:
    """Base configuration class."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-key-please-change"
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # request bodies are small JSON payloads

    # Language model
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
    OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_TEMPERATURE = float(os.environ.get("OPENAI_TEMPERATURE", "0.7"))
    OPENAI_MAX_TOKENS = int(os.environ.get("OPENAI_MAX_TOKENS", "300"))

    # Map style document restyled by the session
    STYLE_URL = os.environ.get("STYLE_URL", DEFAULT_STYLE_URL)
    STYLE_FETCH_TIMEOUT = int(os.environ.get("STYLE_FETCH_TIMEOUT", "10"))

    # Directory holding roles.json; None means this package directory
    ROLE_CONFIG_DIR = os.environ.get("ROLE_CONFIG_DIR")


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False


class TestingConfig(Config):
    """Testing configuration; never talks to a real model."""

    TESTING = True
    OPENAI_API_KEY = "test-key"
    STYLE_URL = None


# Configuration presets
config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}

# Role configuration
from .manager import ConfigManager
from .schemas import (ROLE_ORDER, ApplyReport, RoleKeywords, StyleObject,
                      StyleRole)

# Public API
__all__ = [
    "config",
    "Config",
    "DevelopmentConfig",
    "ProductionConfig",
    "TestingConfig",
    "DEFAULT_STYLE_URL",
    "ConfigManager",
    "StyleRole",
    "ROLE_ORDER",
    "StyleObject",
    "ApplyReport",
    "RoleKeywords",
]
