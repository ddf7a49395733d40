import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ============================================================
# Logging
# ============================================================
LOG_LEVEL = os.getenv("BONDING_ENGINE_LOG_LEVEL", "INFO").upper()

# ============================================================
# Web adapter
# ============================================================
API_HOST = os.getenv("BONDING_ENGINE_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("BONDING_ENGINE_API_PORT", "5000"))
DEBUG = _env_bool("BONDING_ENGINE_DEBUG")
