# nailbook/db.py

from sqlmodel import SQLModel, create_engine, Session

from .config import get_settings

DATABASE_URL = get_settings().database_url

# Engine = connection to the database
engine = create_engine(
    DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)


def create_db_and_tables():
    SQLModel.metadata.create_all(engine)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session
