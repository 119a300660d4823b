"""Preferences model for storing the learned naming taste."""

from sqlalchemy import Integer, String, JSON
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Preference(Base, TimestampMixin):
    """Model for storing a naming preference record.

    One row per user key ("household" for the shared record).

    data structure:
    {
        "selectedNames": ["The Spicy Garden Feast", ...],
        "keywords": {"spicy": 2, "garden": 1},
        "tonePreferences": {"playful": 3}
    }
    """

    __tablename__ = "preferences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    data: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<Preference(id={self.id}, user='{self.user}')>"
