"""
Database init - Exports for services and routes
"""

from .base import Base, TimestampMixin, UUIDMixin
from .store import EntityStore
from .unit_of_work import atomic
from app.database import engine, SessionLocal, get_db

__all__ = ["Base", "TimestampMixin", "UUIDMixin", "EntityStore", "atomic", "engine", "SessionLocal", "get_db"]
