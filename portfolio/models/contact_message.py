from sqlalchemy import Column, String, DateTime, Boolean, Text

from portfolio.core.database import Base
from portfolio.models.base import id_column, utcnow


class ContactMessage(Base):
    """Visitor message from the public contact form; readable by admins only"""
    __tablename__ = "contact_messages"

    message_id = id_column()
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    read = Column(Boolean, default=False, nullable=False)

    @property
    def owner_id(self):
        return None
