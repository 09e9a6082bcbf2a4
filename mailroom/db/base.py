"""Declarative base and the property table that carries the database identity."""

from sqlalchemy import String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all mailroom ORM models."""


class Property(Base):
    """Key/value metadata about the database itself (uuid, revision)."""

    __tablename__ = "properties"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
