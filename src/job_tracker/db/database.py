# job-tracker-backend\src\job_tracker\db\database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator # Import Generator for the dependency return type hint

from job_tracker.core.config import settings


# Database URL is loaded from settings
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# check_same_thread is needed only for SQLite, since FastAPI runs sync
# endpoints in a threadpool
connect_args = {}
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
)

# Create a configured "Session" class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Dependency to get a database session
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db # Provide the session to the endpoint
    finally:
        db.close() # Uncommitted work is rolled back on close
