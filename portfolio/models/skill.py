from sqlalchemy import Column, String, Integer, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from portfolio.core.database import Base
from portfolio.models.base import ID_LENGTH, id_column


class Skill(Base):
    """Global skill catalog entry, managed by admins"""
    __tablename__ = "skills"

    skill_id = id_column()
    name = Column(String(255), unique=True, nullable=False)
    category = Column(String(255), nullable=True)
    proficiency = Column(Integer, nullable=True)

    user_skills = relationship("UserSkill", back_populates="skill", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def owner_id(self):
        # Shared catalog: no owner, only admins may change it
        return None


class UserSkill(Base):
    """Link between a user and a catalog skill"""
    __tablename__ = "user_skills"

    __table_args__ = (
        UniqueConstraint('user_id', 'skill_id', name='uq_user_skills_user_skill'),
    )

    user_skill_id = id_column()
    user_id = Column(String(ID_LENGTH), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(String(ID_LENGTH), ForeignKey("skills.skill_id", ondelete="CASCADE"), nullable=False, index=True)
    years_experience = Column(Numeric(4, 1, asdecimal=False), nullable=True)

    user = relationship("User", back_populates="user_skills")
    skill = relationship("Skill", back_populates="user_skills", lazy="joined")

    @property
    def owner_id(self) -> str:
        return self.user_id

    @property
    def name(self):
        return self.skill.name if self.skill is not None else None

    @property
    def category(self):
        return self.skill.category if self.skill is not None else None

    @property
    def skill_proficiency(self):
        return self.skill.proficiency if self.skill is not None else None
