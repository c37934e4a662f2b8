"""Author model.

Authors own courses; deleting an author deletes their courses.
"""

import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.course import Course


class Author(Base):
    """Author of one or more courses."""

    __tablename__ = "authors"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    main_category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    courses: Mapped[list["Course"]] = relationship(
        back_populates="author",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, name={self.first_name} {self.last_name})>"
