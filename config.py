"""
Application configuration module.

This module defines configuration classes for different environments
(development, testing, production). Configuration values are loaded
from environment variables with sensible defaults.
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Base configuration with default settings."""

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")

    # Static HTML pages and the registered-users file
    PUBLIC_DIR: str = os.environ.get("PUBLIC_DIR", str(BASE_DIR / "public"))
    USER_STORE_PATH: str = os.environ.get(
        "USER_STORE_PATH",
        str(BASE_DIR / "data" / "registeredUsers.json")
    )

    # Cookie names
    SESSION_ID_COOKIE: str = "sessionid"
    MESSAGE_COOKIE: str = "message"
    CURRENT_TODO_COOKIE: str = "currentTodo"

    # Lifetime of the one-shot login message, in seconds
    MESSAGE_COOKIE_MAX_AGE: int = int(os.environ.get("MESSAGE_COOKIE_MAX_AGE", "5"))

    # Lifetime of a login session and its cookie, in seconds
    SESSION_LIFETIME_SECONDS: int = int(os.environ.get("SESSION_LIFETIME_SECONDS", "86400"))

    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    SESSION_COOKIE_SECURE: bool = (
        os.environ.get("SESSION_COOKIE_SECURE", "false").strip().lower() == "true"
    )


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG: bool = True
    TESTING: bool = True

    # Paths are keys into the mock file system used by the test suite
    PUBLIC_DIR: str = "./public"
    USER_STORE_PATH: str = "./data/registeredUsers.json"


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False
    SESSION_COOKIE_SECURE: bool = (
        os.environ.get("SESSION_COOKIE_SECURE", "true").strip().lower() == "true"
    )


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
