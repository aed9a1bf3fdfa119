import os
from dotenv import load_dotenv
load_dotenv()


def _env_flag(name, default="0"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///hiring.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # JSON API: forms are posted by the SPA, not rendered server-side
    WTF_CSRF_ENABLED = _env_flag("WTF_CSRF_ENABLED", "0")
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    RQ_ENABLED = _env_flag("RQ_ENABLED", "1")
    SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
    MAIL_ENABLED = _env_flag("MAIL_ENABLED", "1")
    MAIL_FROM = os.getenv("MAIL_FROM", "noreply@example.com")
    MAIL_FROM_NAME = os.getenv("MAIL_FROM_NAME", "Hiring Team")
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
    EVALUATION_PASS_THRESHOLD = int(os.getenv("EVALUATION_PASS_THRESHOLD", "60"))
    MAX_TASK_LINKS = int(os.getenv("MAX_TASK_LINKS", "10"))
    SEED_ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com")
    SEED_ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    RQ_ENABLED = False
    MAIL_ENABLED = False
    SENDGRID_API_KEY = None
