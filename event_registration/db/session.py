# event_registration/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from event_registration.core.config import settings

# The engine handles connection pooling for the configured database URL.
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """One session per request, always closed when the endpoint finishes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
