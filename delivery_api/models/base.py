from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

# Create a declarative base which all models will inherit from
Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, konsisten untuk semua kolom DateTime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Define a BaseModel with common columns to keep the code DRY (Don't Repeat Yourself)
# This is an abstract class; it won't be created as a table itself.
class BaseModel(Base):
    __abstract__ = True
    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
