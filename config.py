import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./app.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Session credentials
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    SESSION_EXPIRY_DAYS = data.get("SESSION_EXPIRY_DAYS", 7)
    BCRYPT_ROUNDS = data.get("BCRYPT_ROUNDS", 12)

    # Password reset
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:5173")
    DEV_MODE = bool(data.get("DEV_MODE", False))
    NOTIFICATION_TIMEOUT_SECONDS = data.get("NOTIFICATION_TIMEOUT_SECONDS", 10)

    # Outbound email
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = data.get("SMTP_PORT", 587)
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    EMAIL_FROM = data.get("EMAIL_FROM", "")
    APP_NAME = data.get("APP_NAME", "CodeReview.ai")
