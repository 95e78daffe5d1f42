# substation_backend/config.py
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_DB_FILENAME = "maintenance.db"

# DeepSeek exposes an OpenAI compatible chat completions API
DEFAULT_CHAT_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_CHAT_MODEL = "deepseek-chat"
DEFAULT_CHAT_TIMEOUT_S = 60.0
MIN_CHAT_TIMEOUT_S = 1.0
DEFAULT_REFRESH_DELAY_S = 1.5
DEFAULT_TECHNICIAN = "John Smith"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        print(f"Warning: {name}={raw!r} is not a number, using {default}")
        return default


def db_path_override() -> str:
    return os.getenv("MAINTENANCE_DB_PATH", "")


def alert_store_url() -> str:
    return os.getenv("ALERT_STORE_URL", "").rstrip("/")


def alert_refresh_delay() -> float:
    return max(_float_env("ALERT_REFRESH_DELAY_S", DEFAULT_REFRESH_DELAY_S), 0.0)


def chat_api_key() -> str:
    return os.getenv("DEEPSEEK_API_KEY", "")


def chat_base_url() -> str:
    return os.getenv("CHAT_BASE_URL", DEFAULT_CHAT_BASE_URL).rstrip("/")


def chat_model() -> str:
    return os.getenv("CHAT_MODEL", DEFAULT_CHAT_MODEL)


def chat_timeout() -> float:
    return max(_float_env("CHAT_TIMEOUT_S", DEFAULT_CHAT_TIMEOUT_S), MIN_CHAT_TIMEOUT_S)


def chat_mode() -> str:
    """Either "llm" (remote completions) or "scripted" (canned keyword replies)."""
    mode = os.getenv("CHAT_MODE", "llm").strip().lower()
    return mode if mode in ("llm", "scripted") else "llm"


def technician_name() -> str:
    return os.getenv("TECHNICIAN_NAME", DEFAULT_TECHNICIAN)
