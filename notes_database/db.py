import logging
import os

from dotenv import load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from notes_database.models import Base

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "./notes.db"


# PUBLIC_INTERFACE
def get_database_url():
    """
    Retrieves the database URL from the environment.

    DATABASE_URL wins when set; otherwise a SQLite URL is built from DB_PATH
    (defaulting to ./notes.db).
    """
    load_dotenv()
    db_url = os.getenv("DATABASE_URL")
    if db_url:
        return db_url
    db_path = os.path.abspath(os.getenv("DB_PATH", DEFAULT_DB_PATH))
    return f"sqlite:///{db_path}"


def _set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


# PUBLIC_INTERFACE
def create_db_engine(database_url, **kwargs):
    """
    Creates a SQLAlchemy engine for the given URL.

    SQLite connections get foreign key enforcement and WAL journaling on
    every new DBAPI connection.
    """
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    engine = create_engine(database_url, future=True, echo=False, **kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


# PUBLIC_INTERFACE
class Database:
    """
    Owns the engine and session factory for one store.

    Constructed explicitly and handed to the app; there is no module-level
    connection.
    """

    def __init__(self, database_url=None, **engine_kwargs):
        self.url = database_url or get_database_url()
        self.engine = create_db_engine(self.url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        """Creates tables and indexes that do not exist yet. Safe on every startup."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ready at %s", self.engine.url.render_as_string(hide_password=True))

    def drop_all(self):
        Base.metadata.drop_all(bind=self.engine)

    def session(self):
        return self.SessionLocal()

    def dispose(self):
        self.engine.dispose()
