# API endpoints
from . import auth, users, projects, gallery, skills, user_skills, experiences, education, social_links, resumes, contact, health

__all__ = ["auth", "users", "projects", "gallery", "skills", "user_skills", "experiences", "education", "social_links", "resumes", "contact", "health"]
