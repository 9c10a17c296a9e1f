"""
Database Seed Data Module

Sample admin and portfolio owner with a project, gallery, skills, work
history, education, social links, a resume and one contact message.
Run with: python -m portfolio.db.seed_data

Seeding is skipped when the admin account already exists.
"""
import asyncio
from datetime import date, datetime
from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import AsyncSessionLocal, init_db
from portfolio.core.security import get_password_hash
from portfolio.models import (
    ContactMessage,
    Education,
    Experience,
    Project,
    ProjectGalleryImage,
    Resume,
    Skill,
    SocialLink,
    User,
    UserRole,
    UserSkill,
)


# ==================== Sample Data Constants ====================

ADMIN_EMAIL = "admin@example.com"

SAMPLE_USERS = [
    {
        "email": ADMIN_EMAIL,
        "password": "admin123",
        "full_name": "Admin User",
        "profile_pic_url": "https://picsum.photos/seed/admin/300/300",
        "bio": "System administrator with full access",
        "role": UserRole.ADMIN,
    },
    {
        "email": "alice@example.com",
        "password": "password123",
        "full_name": "Alice Johnson",
        "profile_pic_url": "https://picsum.photos/seed/alice/300/300",
        "bio": "Web developer and tech enthusiast",
        "role": UserRole.USER,
    },
]

SAMPLE_SKILLS = [
    {"name": "JavaScript", "category": "Programming", "proficiency": 90},
    {"name": "React", "category": "Frontend", "proficiency": 85},
    {"name": "Node.js", "category": "Backend", "proficiency": 88},
    {"name": "PostgreSQL", "category": "Database", "proficiency": 80},
    {"name": "CSS", "category": "Frontend", "proficiency": 85},
]

# skill name -> years of experience for the portfolio owner
OWNER_SKILL_YEARS = {"JavaScript": 5.5, "React": 4.0, "Node.js": 4.5, "PostgreSQL": 3.5}

SAMPLE_GALLERY = [
    ("https://picsum.photos/seed/ecommerce-gallery1/800/600", "Homepage showing featured products"),
    ("https://picsum.photos/seed/ecommerce-gallery2/800/600", "Mobile responsive product listing"),
    ("https://picsum.photos/seed/ecommerce-gallery3/800/600", "Secure checkout process"),
]

SAMPLE_SOCIAL_LINKS = [
    {"platform": "github", "url": "https://github.com/alicej", "display_text": "alicej"},
    {"platform": "linkedin", "url": "https://linkedin.com/in/alicejohnson", "display_text": "Alice Johnson"},
    {"platform": "twitter", "url": "https://twitter.com/alicecoding", "display_text": "@alicecoding"},
]


# ==================== Seed Functions ====================

async def seed_users(db: AsyncSession) -> Dict[str, User]:
    """Create sample users, keyed by email"""
    users = {}
    for data in SAMPLE_USERS:
        user = User(
            email=data["email"],
            hashed_password=get_password_hash(data["password"]),
            full_name=data["full_name"],
            profile_pic_url=data["profile_pic_url"],
            bio=data["bio"],
            role=data["role"],
        )
        db.add(user)
        users[user.email] = user

    await db.flush()
    print(f"Created {len(users)} users")
    return users


async def seed_projects(db: AsyncSession, owner: User) -> List[Project]:
    project = Project(
        user_id=owner.user_id,
        title="E-commerce Platform",
        slug="ecommerce-platform",
        featured_image="https://picsum.photos/seed/ecommerce/1200/800",
        category="Web Development",
        excerpt="A fully featured e-commerce platform with modern UI and secure checkout.",
        content=(
            "This project involved creating a complete e-commerce solution with inventory management, "
            "user authentication, and payment processing. The stack includes React, Node.js, and PostgreSQL."
        ),
        client="Retail Store Inc.",
        technologies=["React", "Node.js", "Express", "PostgreSQL"],
        project_url="https://ecommerce.example.com",
        project_date=date(2023, 6, 1),
    )
    db.add(project)
    await db.flush()

    for position, (url, caption) in enumerate(SAMPLE_GALLERY, start=1):
        db.add(ProjectGalleryImage(
            project_id=project.project_id,
            image_url=url,
            caption=caption,
            sort_order=position,
        ))

    await db.flush()
    print(f"Created 1 project with {len(SAMPLE_GALLERY)} gallery images")
    return [project]


async def seed_skills(db: AsyncSession, owner: User) -> List[Skill]:
    skills = [Skill(**data) for data in SAMPLE_SKILLS]
    db.add_all(skills)
    await db.flush()

    by_name = {skill.name: skill for skill in skills}
    for name, years in OWNER_SKILL_YEARS.items():
        db.add(UserSkill(user_id=owner.user_id, skill_id=by_name[name].skill_id, years_experience=years))

    await db.flush()
    print(f"Created {len(skills)} skills and {len(OWNER_SKILL_YEARS)} user skills")
    return skills


async def seed_profile(db: AsyncSession, owner: User) -> None:
    """Experience, education, social links and resume for the portfolio owner"""
    db.add_all([
        Experience(
            user_id=owner.user_id,
            title="Senior Frontend Developer",
            company="Tech Solutions Inc.",
            description="Led the development of various client projects and mentored junior developers.",
            start_date=date(2020, 3, 1),
            end_date=date(2023, 8, 31),
            current=False,
            location="New York, NY",
        ),
        Experience(
            user_id=owner.user_id,
            title="Full Stack Developer",
            company="Innovate Labs",
            description="Developing full-stack applications using modern web technologies.",
            start_date=date(2023, 9, 1),
            current=True,
            location="Remote",
        ),
        Education(
            user_id=owner.user_id,
            institution="State University",
            degree="B.S. in Computer Science",
            field_of_study="Computer Science",
            description="Graduated with honors",
            start_year=2015,
            end_year=2019,
        ),
        Education(
            user_id=owner.user_id,
            institution="Online Academy",
            degree="Advanced React Development",
            field_of_study="Software Development",
            description="Focus on modern React patterns and best practices",
            start_year=2022,
            end_year=2022,
        ),
        Resume(
            user_id=owner.user_id,
            file_url="https://example.com/resumes/alice_johnson.pdf",
            file_name="Alice_Johnson_Resume.pdf",
            file_size=102400,
            uploaded_at=datetime(2023, 10, 1, 14, 30),
            primary_resume=True,
        ),
    ])
    db.add_all([SocialLink(user_id=owner.user_id, **link) for link in SAMPLE_SOCIAL_LINKS])

    await db.flush()
    print("Created experiences, education, social links and resume")


async def seed_contact_messages(db: AsyncSession) -> None:
    db.add(ContactMessage(
        name="John Smith",
        email="john@example.com",
        subject="Partnership Inquiry",
        message="I would like to discuss a potential partnership. Please contact me at your earliest convenience.",
    ))
    await db.flush()
    print("Created 1 contact message")


# ==================== Main Seed Function ====================

async def seed_all():
    """Seed all sample data"""
    print("=" * 50)
    print("Starting database seeding...")
    print("=" * 50)

    await init_db()

    async with AsyncSessionLocal() as db:
        existing = await db.scalar(select(User).where(User.email == ADMIN_EMAIL))
        if existing:
            print("Seed data already present - skipping")
            return

        try:
            users = await seed_users(db)
            owner = users["alice@example.com"]
            await seed_projects(db, owner)
            await seed_skills(db, owner)
            await seed_profile(db, owner)
            await seed_contact_messages(db)

            await db.commit()
            print("=" * 50)
            print("Database seeding completed successfully!")
            print("=" * 50)

        except Exception as e:
            await db.rollback()
            print(f"Error seeding database: {e}")
            raise


def main():
    asyncio.run(seed_all())


if __name__ == "__main__":
    main()
