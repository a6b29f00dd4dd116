"""User record: the only table of the service."""
from sqlalchemy import Column, Integer, Text

from app.db.session import Base


class User(Base):
    __tablename__ = "users"
    # never reuse ids on SQLite either
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(Text, nullable=True)
    correo = Column(Text, nullable=True)
