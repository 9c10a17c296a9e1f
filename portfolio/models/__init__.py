# Re-export all models for convenient imports
from portfolio.models.user import User, UserRole
from portfolio.models.project import Project, ProjectGalleryImage
from portfolio.models.skill import Skill, UserSkill
from portfolio.models.experience import Experience
from portfolio.models.education import Education
from portfolio.models.social_link import SocialLink
from portfolio.models.resume import Resume
from portfolio.models.contact_message import ContactMessage

__all__ = [
    # User
    "User",
    "UserRole",
    # Projects
    "Project",
    "ProjectGalleryImage",
    # Skills
    "Skill",
    "UserSkill",
    # Profile sections
    "Experience",
    "Education",
    "SocialLink",
    "Resume",
    # Contact
    "ContactMessage",
]
