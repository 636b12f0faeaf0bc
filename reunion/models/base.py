from datetime import datetime, UTC
from uuid import uuid4
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Stable constraint names
convention = {
    "ix": "ix_%(column_0_label)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_name)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s"  # Primary key
}

metadata = MetaData(naming_convention=convention)

def generate_id() -> str:
    """Opaque text primary key."""
    return str(uuid4())

def utcnow() -> datetime:
    return datetime.now(UTC)

class Base(DeclarativeBase):
    """Base class for all database models"""
    metadata = metadata
