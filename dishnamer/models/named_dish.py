"""Named dish model for the acceptance history."""

from datetime import datetime

from sqlalchemy import Integer, Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow


class NamedDish(Base):
    """One accepted dish name.

    Rows are only ever appended. `image` holds whatever the client displayed
    (usually a data URI) and is never interpreted.
    """

    __tablename__ = "named_dishes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    suggestions: Mapped[list | None] = mapped_column(JSON, nullable=True)
    accepted_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<NamedDish(id={self.id}, name='{self.name}')>"
