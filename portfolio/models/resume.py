from sqlalchemy import Column, String, DateTime, BigInteger, Boolean, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from portfolio.core.database import Base
from portfolio.models.base import ID_LENGTH, id_column, utcnow


class Resume(Base):
    """Uploaded resume file; at most one per user is primary"""
    __tablename__ = "resumes"

    __table_args__ = (
        Index('ix_resumes_user_primary', 'user_id', 'primary_resume'),
    )

    resume_id = id_column()
    user_id = Column(String(ID_LENGTH), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    file_url = Column(Text, nullable=False)
    file_name = Column(String(255), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    uploaded_at = Column(DateTime, default=utcnow, nullable=False)
    primary_resume = Column(Boolean, default=True, nullable=False)

    user = relationship("User", back_populates="resumes")

    @property
    def owner_id(self) -> str:
        return self.user_id
