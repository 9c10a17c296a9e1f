# Request/response models and list criteria
from portfolio.schemas.common import ListQuery, MessageResponse, PaginationInfo, criteria_dependency, require_changes
from portfolio.schemas.user import UserResponse, ProfileUpdate, UserQuery
from portfolio.schemas.auth import UserRegister, UserLogin, AuthResponse
from portfolio.schemas.project import (
    ProjectCreate, ProjectUpdate, ProjectResponse, ProjectDetailResponse, ProjectQuery,
    GalleryImageCreate, GalleryImageUpdate, GalleryImageResponse, GalleryImageQuery,
)
from portfolio.schemas.skill import (
    SkillCreate, SkillUpdate, SkillResponse, SkillQuery,
    UserSkillCreate, UserSkillUpdate, UserSkillResponse, UserSkillQuery,
)
from portfolio.schemas.experience import ExperienceCreate, ExperienceUpdate, ExperienceResponse, ExperienceQuery
from portfolio.schemas.education import EducationCreate, EducationUpdate, EducationResponse, EducationQuery
from portfolio.schemas.social_link import SocialLinkCreate, SocialLinkUpdate, SocialLinkResponse, SocialLinkQuery
from portfolio.schemas.resume import ResumeUpdate, ResumeResponse, ResumeQuery
from portfolio.schemas.contact import (
    ContactMessageCreate, ContactMessageUpdate, ContactMessageResponse, ContactMessageQuery,
)
