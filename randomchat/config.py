"""Random Chat — configuration loaded from the environment."""

import os

from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


# ── Config ────────────────────────────────────────────────────────────────────
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _int_env("PORT", 80)

SESSION_COOKIE = "id"
SESSION_TTL_SECONDS = _int_env("SESSION_TTL_SECONDS", 30 * 60)  # 30 minutes
SWEEP_INTERVAL_SECONDS = 1.0

PAGE_REFRESH_SECONDS = _int_env("PAGE_REFRESH_SECONDS", 3)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

TEMPLATE_PATH = os.path.join(os.path.dirname(__file__), "templates", "index.html")
