import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
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
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    # Must carry at least 32 bytes of entropy in production
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_ACCESS_TTL_MINUTES = int(data.get("JWT_ACCESS_TTL_MINUTES", 15))
    JWT_REFRESH_TTL_DAYS = int(data.get("JWT_REFRESH_TTL_DAYS", 7))
    PASSWORD_RESET_TTL_HOURS = int(data.get("PASSWORD_RESET_TTL_HOURS", 1))
    ARGON2_TIME_COST = int(data.get("ARGON2_TIME_COST", 3))
    ARGON2_MEMORY_COST = int(data.get("ARGON2_MEMORY_COST", 65536))
    ARGON2_PARALLELISM = int(data.get("ARGON2_PARALLELISM", 4))
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
    # Initial administrator created by src.scripts.init_roles; skipped without a password
    ADMIN_EMAIL = data.get("ADMIN_EMAIL", "admin@example.com")
    ADMIN_PASSWORD = data.get("ADMIN_PASSWORD")
    ADMIN_NAME = data.get("ADMIN_NAME", "Administrator")
