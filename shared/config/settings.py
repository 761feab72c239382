import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parents[2]

DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost") # In Docker, this will be 'postgres'
DB_PORT = os.getenv("POSTGRES_PORT", "5432")
DB_NAME = os.getenv("POSTGRES_DB", "storefront")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)
# The demo scripts write driver-less URLs; the app needs the async driver
if DATABASE_URL.startswith(("postgresql://", "postgres://")):
    DATABASE_URL = "postgresql+asyncpg://" + DATABASE_URL.split("://", 1)[1]
DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

OTEL_ENABLED = os.getenv("OTEL_ENABLED", "true").lower() == "true"
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "http://localhost:4317")

# Demo control: the scripts live outside this package
DEMO_DIR = Path(os.getenv("DEMO_DIR", str(BASE_DIR / "demo")))
DEMO_MANAGER_SCRIPT = Path(os.getenv("DEMO_MANAGER_SCRIPT", str(DEMO_DIR / "demo-manager.sh")))
BACKEND_ENV_PATH = Path(os.getenv("BACKEND_ENV_PATH", str(BASE_DIR / ".env")))
FEATURE_MARKER_PATH = Path(os.getenv("FEATURE_MARKER_PATH", str(BASE_DIR / "feature_applied")))
SCRIPT_TIMEOUT_SECONDS = float(os.getenv("SCRIPT_TIMEOUT_SECONDS", "120"))
