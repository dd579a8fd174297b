import os

# --- Config ---
BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # SECURITY: set a secure random key in production via env var
    SECRET_KEY = os.environ.get('CATALOG_SECRET') or "dev-secret-change-me"
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or f"sqlite:///{os.path.join(BASE_DIR, 'catalog.db')}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "sql" (Flask-SQLAlchemy) or "memory" (in-process, lost on restart)
    CATALOG_STORE = os.environ.get('CATALOG_STORE', 'sql')
    # 0 runs independent fetches inline, N > 0 runs them on N worker threads
    CATALOG_FANOUT_WORKERS = int(os.environ.get('CATALOG_FANOUT_WORKERS', '0'))
    CATALOG_LOG_LEVEL = os.environ.get('CATALOG_LOG_LEVEL', 'INFO')
    CATALOG_CREATE_TABLES = True

    TALISMAN_ENABLED = True
    TALISMAN_FORCE_HTTPS = _env_flag('CATALOG_FORCE_HTTPS')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    CATALOG_STORE = 'sql'
    CATALOG_FANOUT_WORKERS = 0
    TALISMAN_FORCE_HTTPS = False
