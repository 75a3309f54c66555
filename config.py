from typing import Optional

from decouple import config
from sqlalchemy.engine import URL

PORT = config("PORT", default=3000, cast=int)
HOST = config("HOST", default="0.0.0.0")
LOG_LEVEL = config("LOG_LEVEL", default="INFO")

DB_SYNC = config("DB_SYNC", default=True, cast=bool)
DB_ECHO = config("DB_ECHO", default=False, cast=bool)

SQLITE_FALLBACK_URL = "sqlite:///./database.db"


def get_database_url() -> str:
    """Build the SQLAlchemy URL from DATABASE_URL or the DB_* parts."""
    url: Optional[str] = config("DATABASE_URL", default=None)
    if url:
        return url

    host = config("DB_HOST", default=None)
    if not host:
        return SQLITE_FALLBACK_URL

    port = config("DB_PORT", default=None)
    return URL.create(
        drivername=config("DB_DRIVER", default="postgresql"),
        username=config("DB_USER", default=None),
        password=config("DB_PASSWORD", default=None),
        host=host,
        port=int(port) if port else None,
        database=config("DB_NAME", default=None),
    ).render_as_string(hide_password=False)


DATABASE_URL = get_database_url()
