from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from portfolio.core.database import Base
from portfolio.models.base import ID_LENGTH, id_column


class SocialLink(Base):
    __tablename__ = "social_links"

    social_id = id_column()
    user_id = Column(String(ID_LENGTH), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    platform = Column(String(100), nullable=False)
    url = Column(Text, nullable=False)
    display_text = Column(String(255), nullable=True)

    user = relationship("User", back_populates="social_links")

    @property
    def owner_id(self) -> str:
        return self.user_id
