from sqlalchemy import Column, String, Date, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship

from portfolio.core.database import Base
from portfolio.models.base import ID_LENGTH, id_column


class Experience(Base):
    """Work history entry"""
    __tablename__ = "experiences"

    experience_id = id_column()
    user_id = Column(String(ID_LENGTH), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    current = Column(Boolean, default=False, nullable=False)
    location = Column(String(255), nullable=True)

    user = relationship("User", back_populates="experiences")

    @property
    def owner_id(self) -> str:
        return self.user_id
