"""
Runtime settings for the club portal.
Values come from environment variables (optionally loaded from a .env file).
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
TEMPLATES_DIR = os.path.join(BASE_DIR, "templates")
STATIC_DIR = os.path.join(BASE_DIR, "static")


def _split_list(raw):
    return [item.strip() for item in raw.split(",") if item.strip()]


def _project_path(raw):
    # relative paths project root se resolve hote hain, cwd se nahi
    return raw if os.path.isabs(raw) else os.path.join(BASE_DIR, raw)


@dataclass
class Settings:
    database_url: str = "sqlite:///club_portal.db"
    secret_key: str = "dev-secret-key-change-me"
    upload_root: str = os.path.join(STATIC_DIR, "uploads")
    public_url_prefix: str = "/static/uploads"
    club_timezone: str = "UTC"
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"
    admin_email: str = "admin@club.local"
    admin_password: str = "admin123"
    admin_name: str = "Club Admin"


def load_settings():
    return Settings(
        database_url=os.getenv("DATABASE_URL", Settings.database_url),
        secret_key=os.getenv("SECRET_KEY", Settings.secret_key),
        upload_root=_project_path(os.getenv("UPLOAD_ROOT", Settings.upload_root)),
        public_url_prefix=os.getenv("PUBLIC_URL_PREFIX", Settings.public_url_prefix).rstrip("/"),
        club_timezone=os.getenv("CLUB_TIMEZONE", Settings.club_timezone),
        cors_origins=_split_list(os.getenv("CORS_ORIGINS", "http://localhost:3000")),
        log_level=os.getenv("LOG_LEVEL", Settings.log_level).upper(),
        admin_email=os.getenv("ADMIN_EMAIL", Settings.admin_email),
        admin_password=os.getenv("ADMIN_PASSWORD", Settings.admin_password),
        admin_name=os.getenv("ADMIN_NAME", Settings.admin_name),
    )


settings = load_settings()
