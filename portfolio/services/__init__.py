# Services
from portfolio.services.resume_storage import ResumeStorage, resume_storage

__all__ = ["ResumeStorage", "resume_storage"]
