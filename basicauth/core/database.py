"""
Persistence for registered accounts.

One SQLite file holds the `users` table: credentials as bcrypt hashes, the
security question, and the creation time. Sessions are stateless JWTs, so
nothing about logins is stored here.
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from basicauth.core.config import get_settings

settings = get_settings()

engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False},  # request handlers share the engine across threads
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Declarative base for the account tables."""
    pass


def get_db() -> Generator[Session, None, None]:
    """Per-request session for the auth and users routers; closed when the request ends."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the users table if it does not exist yet."""
    # Models must be registered on Base.metadata before create_all
    import basicauth.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_db() -> None:
    """Drop the account tables, discarding every registered user."""
    import basicauth.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
