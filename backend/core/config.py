import os
import logging
from dotenv import load_dotenv

# Configuration & Setup for the application
load_dotenv()

# Database configuration
DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_HOST = os.getenv("DB_HOST")
DB_NAME = os.getenv("DB_NAME")

# An explicit DATABASE_URL wins, then the DB_* parts, then a local SQLite file
if os.getenv("DATABASE_URL"):
  DATABASE_URL = os.getenv("DATABASE_URL")
elif all([DB_USER, DB_PASSWORD, DB_HOST, DB_NAME]):
  DATABASE_URL = f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}/{DB_NAME}"
else:
  DATABASE_URL = "sqlite:///./house_planner.db"

# API configuration
API_PREFIX = os.getenv("API_PREFIX", "/api").rstrip("/")
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
SEED_DEFAULTS = os.getenv("SEED_DEFAULTS", "true").lower() in ("1", "true", "yes", "on")
PORT = int(os.getenv("PORT", "8080"))

# Frontend configuration
BACKEND_URL = os.getenv("BACKEND_URL", f"http://localhost:{PORT}{API_PREFIX}").rstrip("/")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging():
  """Configure root logging once for the API, the Streamlit app and the scripts."""
  logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
  )
