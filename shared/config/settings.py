import os
import warnings

from dotenv import load_dotenv

from shared.pricing import PricingRules

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str = "") -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
IS_PRODUCTION = ENVIRONMENT == "production"


def _secret(name: str) -> str:
    value = os.getenv(name, "")
    if value:
        return value
    if IS_PRODUCTION:
        raise ValueError(f"FATAL ERROR: {name} is not set in the environment!")
    warnings.warn(
        f"{name} is not set. Using an insecure default. Set this env var in production!",
        stacklevel=2,
    )
    return f"insecure-{name.lower()}-change-me"


# --- Database ---
DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost")  # In Docker, this will be 'postgres'
DB_PORT = os.getenv("POSTGRES_PORT", "5432")
DB_NAME = os.getenv("POSTGRES_DB", "storefront")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)
DB_ENABLED = _env_bool("DB_ENABLED", "true")
DB_ECHO = _env_bool("DB_ECHO", "false")
DB_CONNECT_TIMEOUT = float(os.getenv("DB_CONNECT_TIMEOUT", "5"))

# --- Auth ---
JWT_SECRET_KEY = _secret("JWT_SECRET_KEY")
JWT_REFRESH_SECRET_KEY = _secret("JWT_REFRESH_SECRET_KEY")
COOKIE_SECRET = _secret("COOKIE_SECRET")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
ADMIN_EMAILS = [email.lower() for email in _env_list("ADMIN_EMAILS")]

# --- HTTP ---
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
CORS_ORIGINS = _env_list("CORS_ORIGINS", FRONTEND_URL)
RATE_LIMIT_DEFAULT = os.getenv("RATE_LIMIT_DEFAULT", "100 per 15 minutes")
RATE_LIMIT_AUTH = os.getenv("RATE_LIMIT_AUTH", "5 per 15 minutes")

# --- Pricing ---
FREE_SHIPPING_THRESHOLD = float(os.getenv("FREE_SHIPPING_THRESHOLD", "35"))
SHIPPING_FEE = float(os.getenv("SHIPPING_FEE", "5.99"))
TAX_RATE = float(os.getenv("TAX_RATE", "0.08"))
PRICING = PricingRules(FREE_SHIPPING_THRESHOLD, SHIPPING_FEE, TAX_RATE)
DELIVERY_DAYS = int(os.getenv("DELIVERY_DAYS", "5"))

# --- Observability ---
OTEL_ENABLED = _env_bool("OTEL_ENABLED", "false")
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "http://localhost:4317")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
