"""
Configuration constants for the application.
"""
import os
from pathlib import Path

# Load environment variables from .env file if it exists
try:
    from dotenv import load_dotenv
    env_path = Path(__file__).resolve().parent.parent.parent / '.env'
    load_dotenv(dotenv_path=env_path)
except ImportError:
    # python-dotenv not installed, read os.environ directly
    pass


def _is_production() -> bool:
    return bool(
        os.getenv("RAILWAY_ENVIRONMENT") or
        os.getenv("ENVIRONMENT", "").lower() == "production"
    )


IS_PRODUCTION = _is_production()

# All API routes live under this prefix, e.g. /api/challenges/daily
API_PREFIX = "/" + os.getenv("API_PREFIX", "/api").strip().strip("/")
if API_PREFIX == "/":
    API_PREFIX = ""

# Where the Python client talks to by default (same container / local dev)
API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8080/api").strip().rstrip("/")

# Storage backend: "sql" (durable kv_store table) or "memory" (process-local map)
KV_BACKEND = os.getenv("KV_BACKEND", "sql").strip().lower()

# Optional JSON file replacing the built-in catalog / synonym / radical tables
CATALOG_FILE = os.getenv("CATALOG_FILE", "").strip() or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()

ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

ENABLE_DEBUG_ROUTES = os.getenv("ENABLE_DEBUG_ROUTES", "0") == "1"

# Reward schedule for the daily challenge (flat: trying always earns something)
CORRECT_ANSWER_POINTS = 25
WRONG_ANSWER_POINTS = 5

# Discoveries earn this much per radical combined
POINTS_PER_RADICAL = 10

# One level per this many points
POINTS_PER_LEVEL = 100

# Trailing window for weekly activity in progress analytics
WEEKLY_WINDOW_DAYS = 7
