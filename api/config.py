"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_list_env(name: str, default: list[str]) -> list[str]:
    """Parse comma separated list from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    items = [item.strip() for item in raw.split(",")]
    return [item for item in items if item] or default


# Database
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DB_DIR.mkdir(parents=True, exist_ok=True)
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DB_DIR / 'quiz.db'}"
)

# Authentication
SECRET_KEY = os.environ.get(
    "SECRET_KEY",
    os.environ.get("JWT_SECRET", "CHANGE_ME_IN_PRODUCTION_USE_openssl_rand_hex_32"),
)
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = _parse_int_env("ACCESS_TOKEN_EXPIRE_MINUTES", 60)
ADMIN_ROLE = os.environ.get("ADMIN_ROLE", "admin")

# HTTP
CORS_ORIGINS = _parse_list_env("CORS_ORIGINS", ["*"])
SERVER_HOST = os.environ.get("HOST", "127.0.0.1")
SERVER_PORT = _parse_int_env("PORT", 8080)
