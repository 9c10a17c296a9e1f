from sqlalchemy import Column, String, DateTime, Date, Integer, Text, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship

from portfolio.core.database import Base
from portfolio.models.base import ID_LENGTH, id_column, utcnow


class Project(Base):
    """Portfolio case study owned by the user who created it"""
    __tablename__ = "projects"

    __table_args__ = (
        Index('ix_projects_category', 'category'),
        Index('ix_projects_created_at', 'created_at'),
    )

    project_id = id_column()
    user_id = Column(String(ID_LENGTH), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(500), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    featured_image = Column(Text, nullable=False)
    category = Column(String(255), nullable=False)
    excerpt = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    client = Column(String(255), nullable=True)
    technologies = Column(JSON, nullable=True)
    project_url = Column(Text, nullable=True)
    project_date = Column(Date, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Author is always needed for author_name, so load it with the project
    author = relationship("User", back_populates="projects", lazy="joined")
    gallery_images = relationship(
        "ProjectGalleryImage",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProjectGalleryImage.sort_order",
    )

    @property
    def owner_id(self) -> str:
        return self.user_id

    @property
    def author_name(self):
        return self.author.full_name if self.author is not None else None

    def __repr__(self):
        return f"<Project {self.slug}>"


class ProjectGalleryImage(Base):
    """Image attached to a project; ownership follows the project"""
    __tablename__ = "project_gallery_images"

    image_id = id_column()
    project_id = Column(String(ID_LENGTH), ForeignKey("projects.project_id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(Text, nullable=False)
    caption = Column(Text, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)

    project = relationship("Project", back_populates="gallery_images", lazy="joined")

    @property
    def owner_id(self):
        return self.project.user_id if self.project is not None else None
