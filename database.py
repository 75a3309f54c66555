import logging

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, create_engine

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine for the lifetime of the application.

    Built once by ``create_app`` and handed to repositories, so tests can
    swap in an in-memory database.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        self.url = make_url(url)
        if self.url.get_backend_name() == "sqlite":
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        self.engine = create_engine(self.url, echo=echo, **engine_kwargs)

    def authenticate(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def create_db_and_tables(self) -> None:
        SQLModel.metadata.create_all(self.engine)
        logger.info("Tables ready: %s", ", ".join(SQLModel.metadata.tables))

    def dispose(self) -> None:
        self.engine.dispose()
