"""Repositories for the per-user profile sections: experience, education, social links"""
from portfolio.models.education import Education
from portfolio.models.experience import Experience
from portfolio.models.social_link import SocialLink
from portfolio.repositories.base import OwnedRepository
from portfolio.utils.query_builder import Equals, ResourceQuery, Search, YearEquals

EXPERIENCE_QUERY = ResourceQuery(
    model=Experience,
    filters={
        "user_id": Equals(Experience.user_id),
        "company": Search(Experience.company),
        "title": Search(Experience.title),
        "current": Equals(Experience.current),
        "start_year": YearEquals(Experience.start_date),
    },
    sortable={
        "start_date": Experience.start_date,
        "title": Experience.title,
        "company": Experience.company,
    },
    default_sort=("start_date", "desc"),
)

EDUCATION_QUERY = ResourceQuery(
    model=Education,
    filters={
        "user_id": Equals(Education.user_id),
        "degree": Search(Education.degree),
        "institution": Search(Education.institution),
    },
    sortable={
        "start_year": Education.start_year,
        "degree": Education.degree,
        "institution": Education.institution,
    },
    default_sort=("start_year", "desc"),
)

SOCIAL_LINK_QUERY = ResourceQuery(
    model=SocialLink,
    filters={
        "user_id": Equals(SocialLink.user_id),
        "platform": Equals(SocialLink.platform),
    },
    sortable={"platform": SocialLink.platform},
    default_sort=("platform", "asc"),
    default_limit=50,
)


class ExperienceRepository(OwnedRepository[Experience]):
    model = Experience
    query = EXPERIENCE_QUERY
    resource_name = "Experience"


class EducationRepository(OwnedRepository[Education]):
    model = Education
    query = EDUCATION_QUERY
    resource_name = "Education"


class SocialLinkRepository(OwnedRepository[SocialLink]):
    model = SocialLink
    query = SOCIAL_LINK_QUERY
    resource_name = "Social link"
