"""Session factory and context manager for mailroom."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the engine."""
    return sessionmaker(
        engine,
        expire_on_commit=False,
        autoflush=False,
    )


@contextmanager
def get_session(engine: Engine) -> Iterator[Session]:
    """Context manager for a database session.

    Commits on success, rolls back on exception, closes on exit.
    """
    factory = create_session_factory(engine)
    with factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
