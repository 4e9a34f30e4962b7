"""
models/website.py
-----------------
Website (tenant) ORM model.

A website is an external site that embeds our submission endpoint. It owns
its forms exclusively, and through them every message.

secret_key is the literal bearer credential sent by the website; it is stored
as issued. uuid and secret_key never change after registration.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, generate_uuid


class Website(Base, TimestampMixin):
    __tablename__ = "websites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uuid: Mapped[str] = mapped_column(
        String(36), unique=True, nullable=False, index=True, default=generate_uuid
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    domain: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    app_key: Mapped[str] = mapped_column(String(16), unique=True, nullable=False)
    secret_key: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)

    # Relationships
    forms: Mapped[list["Form"]] = relationship(  # noqa: F821
        "Form", back_populates="website", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Website id={self.id} uuid={self.uuid} domain={self.domain}>"
