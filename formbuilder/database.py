from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from .config import DATABASE_URL


def _engine_kwargs(url: str) -> dict:
    if not url.startswith('sqlite'):
        return {}
    kwargs = {'connect_args': {'check_same_thread': False}}
    # in-memory databases only live as long as their single connection
    if url in ('sqlite://', 'sqlite:///:memory:'):
        kwargs['poolclass'] = StaticPool
    return kwargs


engine = create_engine(DATABASE_URL, future=True, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

Base = declarative_base()

def init_db():
    # import models here to ensure they are registered on the metadata
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
