# backend/config.py
import os
from dotenv import load_dotenv
from pathlib import Path

# ============================================================
# 🌍 DETECT ENVIRONMENT AND LOAD THE MATCHING .env
# ============================================================
ENV = os.getenv("ENV", "development")

env_file = ".env.production" if ENV == "production" else ".env.development"
dotenv_path = Path(__file__).resolve().parent / env_file
load_dotenv(dotenv_path)


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


# ============================================================
# ⚙️ GENERAL SETTINGS
# ============================================================
class Settings:
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Tynda Music")
    VERSION: str = os.getenv("VERSION", "1.0")

    # 🔹 MongoDB (catalog + accounts + sessions)
    MONGO_URI: str = os.getenv("MONGO_URI", "")
    MONGO_USER: str = os.getenv("MONGO_USER", "")
    MONGO_PASSWORD: str = os.getenv("MONGO_PASSWORD", "")
    MONGO_HOST: str = os.getenv("MONGO_HOST", "localhost")
    MONGO_PORT: str = os.getenv("MONGO_PORT", "27017")
    MONGO_DB: str = os.getenv("MONGO_DB", "tynda_music")

    # 🔹 Sessions
    SECRET_KEY: str = os.getenv("SECRET_KEY", "supersecret")
    SESSION_TTL_HOURS: int = int(os.getenv("SESSION_TTL_HOURS", "24"))
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "tynda_sid")
    SESSION_COOKIE_SECURE: bool = _as_bool(os.getenv("SESSION_COOKIE_SECURE", "false"))

    # 🔹 Others
    ALLOWED_ORIGINS: list = os.getenv("ALLOWED_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEBUG: bool = _as_bool(os.getenv("DEBUG", "false"))
    ENV: str = ENV


settings = Settings()
