from redroute.db.base import Base, TimestampMixin
from redroute.db.session import Database, get_db

__all__ = ["Base", "TimestampMixin", "Database", "get_db"]
