"""
SQLAlchemy ORM models for database tables.

Models:
    base: Base declarative class
    client: Destination table for accepted client records

Usage:
    from models.base import Base
    from models.client import Client
"""

from models.base import Base
from models.client import Client

__all__ = [
    "Base",
    "Client",
]
