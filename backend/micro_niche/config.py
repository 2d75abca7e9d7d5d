import os
from dotenv import load_dotenv

from micro_niche.errors import ConfigError

# Load .env from project root
load_dotenv()

# ---------- LLM ----------
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://api.openai.com/v1")
LLM_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
LLM_MODEL_DEEP = os.getenv("OPENAI_MODEL_DEEP", LLM_MODEL)
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "45"))

# ---------- Stripe ----------
STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY", "")
STRIPE_PRICE_DEEP_PROOF = os.getenv("STRIPE_PRICE_DEEP_PROOF", "")
STRIPE_TIMEOUT_SECONDS = float(os.getenv("STRIPE_TIMEOUT_SECONDS", "8"))

# ---------- Access pass ----------
PASS_HOURS = float(os.getenv("PASS_HOURS", "24"))
PASS_LOOKUP_TTL_SECONDS = float(os.getenv("PASS_LOOKUP_TTL_SECONDS", "30"))

# ---------- Instant cache ----------
INSTANT_CACHE_TTL_SECONDS = float(os.getenv("INSTANT_CACHE_TTL_SECONDS", str(6 * 60 * 60)))
INSTANT_CACHE_MAX_ENTRIES = int(os.getenv("INSTANT_CACHE_MAX_ENTRIES", "1024"))

# ---------- App ----------
APP_URL = os.getenv("APP_URL", "http://localhost:3000").rstrip("/")
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if o.strip()
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def must_env(name: str) -> str:
    """
    Read a required setting at call time.
    Raises ConfigError when it is unset or blank.
    """
    value = os.getenv(name, "").strip()
    if not value:
        raise ConfigError(f"Missing env: {name}")
    return value
