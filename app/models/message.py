"""
models/message.py
-----------------
Form submission model.

form_data holds the submitted JSON object exactly as received. Messages are
append-only: there is no update path, and they disappear only when their form
or website is deleted.
"""

from typing import Any

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, JSONDocument, TimestampMixin


class Message(Base, TimestampMixin):
    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    form_data: Mapped[dict[str, Any]] = mapped_column(JSONDocument, nullable=False)

    form_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("forms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    form: Mapped["Form"] = relationship("Form", back_populates="messages")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Message id={self.id} form_id={self.form_id}>"
