# config.py
"""
Environment configuration for the RentLedger backend.

Values are read from the process environment (a local .env file is loaded
first). Import the constants directly:

     from config import DATABASE_URL, JWT_SECRET
"""
import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value, default=False):
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Database
DB_SERVER = os.getenv("DB_SERVER")
DB_PORT = os.getenv("DB_PORT", "1433")
DB_USER = os.getenv("DB_USER")
DB_PASS = os.getenv("DB_PASS")
DB_NAME = os.getenv("DB_NAME")


def mssql_url(user, password, server, port, name):
    """MS SQL Server URL for the pymssql driver; credentials are URL-escaped."""
    return (
        f"mssql+pymssql://{quote_plus(user or '')}:{quote_plus(password or '')}"
        f"@{server}:{port}/{name}"
    )


# DATABASE_URL wins; otherwise build the MS SQL Server URL from DB_*
DATABASE_URL = os.getenv("DATABASE_URL") or mssql_url(DB_USER, DB_PASS, DB_SERVER, DB_PORT, DB_NAME)
SQL_ECHO = _as_bool(os.getenv("SQL_ECHO"), False)

# Auth
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ALLOW_SIGNUPS = _as_bool(os.getenv("ALLOW_SIGNUPS"), True)

# HTTP
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "10000"))

# Ledger
OWED_WINDOW_MONTHS = int(os.getenv("OWED_WINDOW_MONTHS", "6"))
RECENT_FEED_LIMIT = int(os.getenv("RECENT_FEED_LIMIT", "10"))

# Create missing tables on startup (local SQLite); use Alembic elsewhere
AUTO_CREATE_TABLES = _as_bool(os.getenv("AUTO_CREATE_TABLES"), DATABASE_URL.startswith("sqlite"))
