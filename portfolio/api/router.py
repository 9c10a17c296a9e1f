from fastapi import APIRouter

from portfolio.api.endpoints import (
    auth,
    contact,
    education,
    experiences,
    gallery,
    health,
    projects,
    resumes,
    skills,
    social_links,
    user_skills,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(projects.router, prefix="/projects", tags=["Projects"])
api_router.include_router(gallery.router, prefix="/gallery-images", tags=["Projects"])
api_router.include_router(skills.router, prefix="/skills", tags=["Skills"])
api_router.include_router(user_skills.router, prefix="/user-skills", tags=["Skills"])
api_router.include_router(experiences.router, prefix="/experiences", tags=["Experience"])
api_router.include_router(education.router, prefix="/education", tags=["Education"])
api_router.include_router(social_links.router, prefix="/social-links", tags=["Social Links"])
api_router.include_router(resumes.router, prefix="/resumes", tags=["Resumes"])
api_router.include_router(contact.router, prefix="/contact", tags=["Contact"])
