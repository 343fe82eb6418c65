from dotenv import load_dotenv
import os
load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
DATABASE_NAME = os.getenv("DATABASE_NAME", "CraftCode")
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "craftcode_dashboard_0212!")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
APP_DEBUG = _as_bool(os.getenv("APP_DEBUG", "false"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if APP_DEBUG else "INFO")

# Echoes POSTed reviews back without saving them. Never enable in production.
REVIEWS_DEBUG_ECHO = _as_bool(os.getenv("REVIEWS_DEBUG_ECHO", "false"))

DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "6"))

# Mongo client timeouts (milliseconds)
MONGO_SERVER_SELECTION_TIMEOUT_MS = 5000
MONGO_CONNECT_TIMEOUT_MS = 10000
MONGO_SOCKET_TIMEOUT_MS = 20000
