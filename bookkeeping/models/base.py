"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets a session
from get_db().
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from bookkeeping.config import get_settings

settings = get_settings()

# --- Engine ---
# pool_pre_ping=True tests connections before handing them out,
# so a restarted database does not surface as a failed request.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# --- Session Factory ---
# autocommit=False: the route decides when a unit of work is committed.
# A journal entry and its lines are written all-or-nothing.
# autoflush=False: SQL is only sent on an explicit flush or commit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally guarantees the session is closed when the
    request finishes, even if the handler raised.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
