from sqlalchemy import Column, String, Integer, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship

from portfolio.core.database import Base
from portfolio.models.base import ID_LENGTH, id_column


class Education(Base):
    """Education history entry"""
    __tablename__ = "educations"

    education_id = id_column()
    user_id = Column(String(ID_LENGTH), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    institution = Column(String(255), nullable=False)
    degree = Column(String(255), nullable=False)
    field_of_study = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    start_year = Column(Integer, nullable=False)
    end_year = Column(Integer, nullable=True)
    current = Column(Boolean, default=False, nullable=False)

    user = relationship("User", back_populates="educations")

    @property
    def owner_id(self) -> str:
        return self.user_id
