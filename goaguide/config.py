"""
config.py
---------
Central configuration for the GoaGuide itinerary scheduler.
All secrets loaded from environment variables — never hard-coded.
"""

import os
from pathlib import Path

# Load .env from the package directory (if it exists) so env vars in that file
# are picked up by os.getenv() below.  Won't override vars already set in the shell.
from dotenv import load_dotenv

_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path, override=False)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# ── Units ─────────────────────────────────────────────────────────────────────
CURRENCY_UNIT: str = os.getenv("CURRENCY_UNIT", "INR")
LOCAL_TIMEZONE: str = os.getenv("LOCAL_TIMEZONE", "Asia/Kolkata")   # destination wall clock

# ── Scheduler knobs ───────────────────────────────────────────────────────────
# Per-day caps
ACTIVITIES_PER_DAY: int      = int(os.getenv("ACTIVITIES_PER_DAY", "3"))
MAX_PER_CATEGORY: int        = int(os.getenv("MAX_PER_CATEGORY", "2"))
TRANSPORT_RATE_PER_KM: float = float(os.getenv("TRANSPORT_RATE_PER_KM", "20"))   # local taxi / scooter fuel
CHEAPER_DISCOUNT: float      = float(os.getenv("CHEAPER_DISCOUNT", "0.30"))      # replace_cheaper alternative
TRAVEL_TIME_FLOOR_MIN: int   = int(os.getenv("TRAVEL_TIME_FLOOR_MIN", "5"))

# ── Weather defaults ──────────────────────────────────────────────────────────
DEFAULT_WEATHER_CONDITION: str = os.getenv("DEFAULT_WEATHER_CONDITION", "Clear")
DEFAULT_WEATHER_TEMP_C: float  = float(os.getenv("DEFAULT_WEATHER_TEMP_C", "28"))
HOT_TEMPERATURE_C: float       = float(os.getenv("HOT_TEMPERATURE_C", "35"))

# ── Per-tool stub flags ───────────────────────────────────────────────────────
# By default every collaborator runs in stub mode (no external API keys needed)
# and the scheduler degrades to its local fallbacks.
USE_STUB_WEATHER: bool = _flag("USE_STUB_WEATHER", "true")
USE_STUB_ROUTING: bool = _flag("USE_STUB_ROUTING", "true")
USE_STUB_LLM: bool     = _flag("USE_STUB_LLM", "true")

# ── OpenWeatherMap (required when USE_STUB_WEATHER=false) ─────────────────────
OPENWEATHER_API_KEY: str  = os.getenv("OPENWEATHER_API_KEY", os.getenv("WEATHER_API_KEY", ""))
OPENWEATHER_URL: str      = os.getenv("OPENWEATHER_URL", "https://api.openweathermap.org/data/2.5/weather")
WEATHER_TIMEOUT_S: float  = float(os.getenv("WEATHER_TIMEOUT_S", "5"))

# ── Google Routes (required when USE_STUB_ROUTING=false) ──────────────────────
GOOGLE_ROUTES_API_KEY: str = os.getenv("GOOGLE_ROUTES_API_KEY", os.getenv("GOOGLE_PLACES_API_KEY", ""))
GOOGLE_ROUTES_URL: str     = os.getenv("GOOGLE_ROUTES_URL", "https://routes.googleapis.com/directions/v2:computeRoutes")
ROUTING_TIMEOUT_S: float   = float(os.getenv("ROUTING_TIMEOUT_S", "5"))

# ── LLM day tips (required when USE_STUB_LLM=false) ───────────────────────────
GEMINI_API_KEY: str   = os.getenv("GEMINI_API_KEY", "")
LLM_MODEL_NAME: str   = os.getenv("LLM_MODEL_NAME", "gemini-1.5-flash")
LLM_TIMEOUT_S: float  = float(os.getenv("LLM_TIMEOUT_S", "10"))

# ── Cache backend ─────────────────────────────────────────────────────────────
CACHE_BACKEND: str      = os.getenv("CACHE_BACKEND", "in_memory")    # "in_memory" | "redis"
CACHE_MAX_ENTRIES: int  = int(os.getenv("CACHE_MAX_ENTRIES", "1024"))
# TTLs (seconds)
WEATHER_CACHE_TTL: int  = int(os.getenv("WEATHER_CACHE_TTL", "600"))
ROUTE_CACHE_TTL: int    = int(os.getenv("ROUTE_CACHE_TTL", "600"))
TIP_CACHE_TTL: int      = int(os.getenv("TIP_CACHE_TTL", "3600"))

# ── Redis (used when CACHE_BACKEND=redis) ─────────────────────────────────────
REDIS_HOST: str      = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT: int      = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB: int        = int(os.getenv("REDIS_DB", "0"))
REDIS_PASSWORD: str  = os.getenv("REDIS_PASSWORD", "")
REDIS_TIMEOUT_S: float = float(os.getenv("REDIS_TIMEOUT_S", "2"))

# ── Observability ─────────────────────────────────────────────────────────────
LOGS_DIR: str = os.getenv("GOAGUIDE_LOGS_DIR", "logs")
