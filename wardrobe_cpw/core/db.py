from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from wardrobe_cpw.core.config import settings


class Base(DeclarativeBase):
    pass


engine = create_engine(settings.DATABASE_URL, future=True)
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
