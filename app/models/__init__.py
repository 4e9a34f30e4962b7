"""
models/__init__.py
------------------
Re-export all models so table creation can import Base and discover
all tables via a single import:

    from app.models import Base
"""

from app.db.base import Base
from app.models.website import Website
from app.models.form import Form
from app.models.message import Message

__all__ = ["Base", "Website", "Form", "Message"]
