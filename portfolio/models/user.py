from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Text
from sqlalchemy.orm import relationship
import enum

from portfolio.core.database import Base
from portfolio.models.base import id_column, utcnow


class UserRole(str, enum.Enum):
    """User roles"""
    USER = "user"
    ADMIN = "admin"


class User(Base):
    """Credential store row; also the owner of every portfolio resource"""
    __tablename__ = "users"

    user_id = id_column()
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    profile_pic_url = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)

    role = Column(
        SQLEnum(UserRole, values_callable=lambda roles: [r.value for r in roles], name="user_role"),
        default=UserRole.USER,
        nullable=False,
    )

    created_at = Column(DateTime, default=utcnow, nullable=False)
    last_login = Column(DateTime, nullable=True)

    # Relationships
    projects = relationship("Project", back_populates="author", cascade="all, delete-orphan", passive_deletes=True)
    experiences = relationship("Experience", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    educations = relationship("Education", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    social_links = relationship("SocialLink", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    resumes = relationship("Resume", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    user_skills = relationship("UserSkill", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def owner_id(self) -> str:
        return self.user_id

    def __repr__(self):
        return f"<User {self.email}>"
