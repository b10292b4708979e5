# gymdesk/adapters/outbound/persistence/models/base_model.py

from datetime import datetime, timezone

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import declarative_base

# Parent class of every ORM model, holds the shared metadata
Base = declarative_base()

# BIGINT primary keys on PostgreSQL; SQLite only autoincrements INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer(), "sqlite")


def utcnow() -> datetime:
    """Naive UTC timestamp, as stored in ``DateTime`` columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
