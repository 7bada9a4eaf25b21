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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./greenlight.db")
    DB_QUERY_TIMEOUT = float(data.get("DB_QUERY_TIMEOUT", 3))
    API_PORT = data.get("API_PORT", 4000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    ENV = data.get("ENV", "development")
    VERSION = data.get("VERSION", "1.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Rate limiter
    LIMITER_ENABLED = bool(data.get("LIMITER_ENABLED", True))
    LIMITER_RPS = float(data.get("LIMITER_RPS", 2))
    LIMITER_BURST = int(data.get("LIMITER_BURST", 4))
    LIMITER_IDLE_TIMEOUT = float(data.get("LIMITER_IDLE_TIMEOUT", 180))
    LIMITER_SWEEP_INTERVAL = float(data.get("LIMITER_SWEEP_INTERVAL", 60))

    # Token lifetimes
    AUTHENTICATION_TOKEN_TTL_HOURS = float(data.get("AUTHENTICATION_TOKEN_TTL_HOURS", 24))
    ACTIVATION_TOKEN_TTL_HOURS = float(data.get("ACTIVATION_TOKEN_TTL_HOURS", 72))
    PASSWORD_RESET_TOKEN_TTL_MINUTES = float(data.get("PASSWORD_RESET_TOKEN_TTL_MINUTES", 45))

    # Outbound mail
    SMTP_HOST = data.get("SMTP_HOST", "localhost")
    SMTP_PORT = int(data.get("SMTP_PORT", 2525))
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_SENDER = data.get("SMTP_SENDER", "Greenlight <no-reply@greenlight.local>")
    SMTP_TIMEOUT = float(data.get("SMTP_TIMEOUT", 5))
    MAIL_MAX_ATTEMPTS = int(data.get("MAIL_MAX_ATTEMPTS", 3))
    MAIL_RETRY_DELAY = float(data.get("MAIL_RETRY_DELAY", 0.5))
