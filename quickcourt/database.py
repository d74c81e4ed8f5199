from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from quickcourt.config import settings


def build_engine(database_url: str):
    """Create the engine; SQLite needs cross-thread access for the request pool."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
