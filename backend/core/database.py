import logging
from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL

logger = logging.getLogger(__name__)

Base = declarative_base()


class Store:
  """
  Handle on the relational store.
  Owns the SQLAlchemy engine and session factory between open() and close().
  One Store is created per application and passed to whatever needs it.
  """

  def __init__(self, database_url: str = DATABASE_URL):
    self.database_url = database_url
    self.engine = None
    self.SessionLocal = None

  @property
  def is_open(self):
    return self.engine is not None

  def open(self):
    if self.is_open:
      return self

    kwargs = {}
    if self.database_url.startswith("sqlite"):
      kwargs["connect_args"] = {"check_same_thread": False}
      # In-memory databases only live as long as their single connection
      if self.database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool

    self.engine = create_engine(self.database_url, **kwargs)
    if self.engine.dialect.name == "sqlite":
      event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

    self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=self.engine)
    logger.info(f"Store opened on {self.engine.url.render_as_string(hide_password=True)}")
    return self

  def close(self):
    if not self.is_open:
      return
    self.engine.dispose()
    logger.info("Store closed.")
    self.engine = None
    self.SessionLocal = None

  def session(self):
    if not self.is_open:
      raise RuntimeError("Store is not open")
    return self.SessionLocal()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
  cursor = dbapi_connection.cursor()
  cursor.execute("PRAGMA foreign_keys=ON")
  cursor.close()


def get_db(request: Request):
  """
  Dependency to get a database session.
  Yields a session from the application's Store and ensures it is closed after use.
  """
  db = request.app.state.store.session()
  try:
    yield db
  finally:
    db.close()
