"""Environment-driven settings. Uses python-dotenv.

Callers use the accessor functions below instead of reading `os.environ`
directly.
"""
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_DB_PATH = "database.json"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5001

# Fixed threshold, not configurable.
LOW_STOCK_THRESHOLD = 5

APP_VERSION = "1.0.0"


def load_config() -> None:
    """Load .env from the working directory. Idempotent."""
    load_dotenv(dotenv_path=Path.cwd() / ".env")


def get_optional(key: str, default: str = "") -> str:
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_bool(key: str, default: bool = False) -> bool:
    raw = get_optional(key, "")
    if not raw:
        return default
    return raw.lower() in ("1", "true", "yes", "on")


# --- Public config accessors ---

def db_path() -> Path:
    """Location of the JSON store file."""
    return Path(get_optional("INVENTORY_DB_PATH", DEFAULT_DB_PATH))


def strict_store() -> bool:
    """Raise on a corrupt store file instead of serving an empty dataset."""
    return get_optional_bool("INVENTORY_STRICT_STORE", False)


def host() -> str:
    return get_optional("INVENTORY_HOST", DEFAULT_HOST)


def port() -> int:
    return get_optional_int("INVENTORY_PORT", DEFAULT_PORT)


def cors_origins() -> List[str]:
    raw = get_optional("INVENTORY_CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()]


def log_level() -> str:
    return get_optional("INVENTORY_LOG_LEVEL", "INFO").upper()


def log_file() -> Optional[Path]:
    val = get_optional("INVENTORY_LOG_FILE", "")
    return Path(val) if val else None


def api_url() -> str:
    """Base URL the SDK and CLI talk to."""
    return get_optional("INVENTORY_API_URL", f"http://{DEFAULT_HOST}:{DEFAULT_PORT}")
