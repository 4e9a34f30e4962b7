"""
models/form.py
--------------
Form definition owned by a single website.

form_id is the public identifier used in submission URLs. It is unique across
all websites, so read-side listings may resolve a form by form_id alone.
form_schema maps field name → declared type; it documents the form and is
never enforced against submissions.
"""

from typing import Any

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, JSONDocument, TimestampMixin, generate_uuid


class Form(Base, TimestampMixin):
    __tablename__ = "forms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    form_id: Mapped[str] = mapped_column(
        String(36), unique=True, nullable=False, index=True, default=generate_uuid
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    form_schema: Mapped[dict[str, Any]] = mapped_column(
        JSONDocument, nullable=False, default=dict
    )
    website_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("websites.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    website: Mapped["Website"] = relationship("Website", back_populates="forms")  # noqa: F821
    messages: Mapped[list["Message"]] = relationship(  # noqa: F821
        "Message", back_populates="form", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Form id={self.id} form_id={self.form_id} website_id={self.website_id}>"
