"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    TESTING = _flag("TESTING", "false")
    DEBUG = _flag("DEBUG", "false")

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "5001"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Auth (identity is issued upstream, we only verify the service token)
    SERVICE_AUTH_SECRET = os.getenv("SERVICE_AUTH_SECRET", "")
    SERVICE_AUTH_ISSUER = os.getenv("SERVICE_AUTH_ISSUER", "parley-identity")
    SERVICE_AUTH_AUDIENCE = os.getenv("SERVICE_AUTH_AUDIENCE", "parley-api")

    # Storage: "memory" keeps everything in process, "prisma" uses PostgreSQL
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory").lower()
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Redis settings
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    REDIS_CACHE_ENABLED = _flag("REDIS_CACHE_ENABLED", "false")
    REDIS_CACHE_TTL: int = int(os.getenv("REDIS_CACHE_TTL", "3600"))

    # Users
    DEFAULT_PHONE_REGION = os.getenv("DEFAULT_PHONE_REGION", "US")

    # Push notifications
    PUSH_NOTIFICATIONS_ENABLED = _flag("PUSH_NOTIFICATIONS_ENABLED", "true")
    PUSH_NOTIFICATION_TITLE = os.getenv(
        "PUSH_NOTIFICATION_TITLE", "Received message from {sender}"
    )


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True
    STORAGE_BACKEND = "memory"
    REDIS_CACHE_ENABLED = False


class ProductionConfig(Config):
    """Production configuration"""

    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "prisma").lower()


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("PARLEY_ENV", "development")
    return config.get(env, config["default"])
