"""Database models for the dish namer."""

from .base import Base, TimestampMixin, utcnow
from .preferences import Preference
from .named_dish import NamedDish

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "utcnow",
    # Models
    "Preference",
    "NamedDish",
]
