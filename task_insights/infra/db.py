from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from task_insights.config import SETTINGS

Base = declarative_base()


def make_engine(url: str) -> Engine:
    return create_engine(url, pool_pre_ping=True)


engine = make_engine(SETTINGS.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db(bind: Engine | None = None) -> None:
    bind = bind or engine
    # model registration happens on import
    from . import models  # noqa: F401

    Base.metadata.create_all(bind)
    with bind.connect() as connection:
        connection.execute(text("SELECT 1"))
