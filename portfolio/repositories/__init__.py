# Data access, one repository per resource
from portfolio.repositories.base import BaseRepository, OwnedRepository
from portfolio.repositories.users import UserRepository
from portfolio.repositories.projects import ProjectRepository, GalleryImageRepository
from portfolio.repositories.skills import SkillRepository, UserSkillRepository
from portfolio.repositories.profile import ExperienceRepository, EducationRepository, SocialLinkRepository
from portfolio.repositories.resumes import ResumeRepository
from portfolio.repositories.contact_messages import ContactMessageRepository

__all__ = [
    "BaseRepository",
    "OwnedRepository",
    "UserRepository",
    "ProjectRepository",
    "GalleryImageRepository",
    "SkillRepository",
    "UserSkillRepository",
    "ExperienceRepository",
    "EducationRepository",
    "SocialLinkRepository",
    "ResumeRepository",
    "ContactMessageRepository",
]
