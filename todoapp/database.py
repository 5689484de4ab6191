from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from todoapp.config import settings

DATABASE_URL = settings.DATABASE["url"]


def build_engine(url: str, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(url, echo=settings.DATABASE["echo"], **kwargs)
    if url.startswith("sqlite"):
        # SQLite ignores ON DELETE rules unless foreign keys are switched on per connection
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


# Request-scoped session, injected with Depends(get_db)
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
