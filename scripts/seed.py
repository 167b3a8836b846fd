"""
Seed script - populates the database with sample data for development.

Usage:
    python -m scripts.seed

Users are normally created by the identity synchronizer on first sign-in.
The seed pre-creates a few with fixed subject ids so that tokens minted by
scripts/dev_token.py line up with existing data.

This script is IDEMPOTENT - running it twice won't create duplicates.
It checks for existing data before inserting.
"""
import asyncio
import sys
import os

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jobnest.core.database import async_session_maker, init_db
from jobnest.models.user import Role, User
from jobnest.models.company import Company
from jobnest.models.job import Job
from jobnest.models.review import Review
from sqlalchemy import select


# ─── Users ─────────────────────────────────────────────────────

USERS = [
    {
        "subject_id": "dev-job-seeker",
        "role": Role.JOB_SEEKER,
        "email": "seeker@jobnest.dev",
        "first_name": "Sam",
        "last_name": "Seeker",
        "skills": ["Python", "SQL", "FastAPI"],
        "experience": "3 years backend development",
    },
    {
        "subject_id": "dev-recruiter",
        "role": Role.RECRUITER,
        "email": "recruiter@jobnest.dev",
        "first_name": "Riley",
        "last_name": "Recruiter",
        "position": "Technical Recruiter",
    },
    {
        "subject_id": "dev-admin",
        "role": Role.ADMIN,
        "email": "admin@jobnest.dev",
        "first_name": "Ada",
        "last_name": "Admin",
    },
]


# ─── Companies ─────────────────────────────────────────────────

COMPANIES = [
    {
        "name": "Acme Analytics",
        "description": "Data platform for retail demand forecasting.",
        "careers_url": "https://acme-analytics.example/careers",
    },
    {
        "name": "Northwind Logistics",
        "description": "Freight routing and warehouse automation software.",
        "careers_url": "https://northwind.example/jobs",
    },
    {
        "name": "Blue Harbor Health",
        "description": "Patient scheduling and telehealth tools for clinics.",
    },
]


# ─── Jobs ──────────────────────────────────────────────────────

SAMPLE_JOBS = [
    {
        "company": "Acme Analytics",
        "title": "Backend Engineer (Python)",
        "description": "Build ingestion APIs with FastAPI and PostgreSQL.",
        "location": "Remote",
        "job_type": "full_time",
        "salary_min": 90000,
        "salary_max": 120000,
        "salary_currency": "USD",
    },
    {
        "company": "Northwind Logistics",
        "title": "Data Engineer",
        "description": "Own the routing data pipeline and its SQL models.",
        "location": "Rotterdam",
        "job_type": "full_time",
    },
    {
        "company": "Blue Harbor Health",
        "title": "Frontend Intern",
        "description": "Help ship the clinic scheduling dashboard.",
        "location": "Boston, MA",
        "job_type": "internship",
    },
]


async def seed():
    """Run the seed."""
    print("Seeding database...")
    await init_db()

    async with async_session_maker() as db:
        # ── Users ──────────────────────────────────────────
        users = {}
        for data in USERS:
            result = await db.execute(select(User).where(User.subject_id == data["subject_id"]))
            user = result.scalar_one_or_none()
            if user is None:
                user = User(**data)
                db.add(user)
            users[data["subject_id"]] = user
        await db.flush()
        print(f"  Users ready: {', '.join(users)}")

        # ── Companies ──────────────────────────────────────
        existing = await db.execute(select(Company).limit(1))
        if existing.scalar_one_or_none():
            print("  Companies already exist, skipping...")
        else:
            db.add_all([Company(**c) for c in COMPANIES])
            await db.flush()
            print(f"  Created {len(COMPANIES)} companies")

        result = await db.execute(select(Company))
        company_map = {c.name: c for c in result.scalars().all()}

        # ── Jobs ───────────────────────────────────────────
        existing = await db.execute(select(Job).limit(1))
        if existing.scalar_one_or_none():
            print("  Jobs already exist, skipping...")
        else:
            recruiter = users["dev-recruiter"]
            for job_data in SAMPLE_JOBS:
                job_data = dict(job_data)
                company = company_map.get(job_data.pop("company"))
                if not company:
                    continue
                db.add(Job(company_id=company.id, posted_by_id=recruiter.id, **job_data))
            await db.flush()
            print(f"  Created {len(SAMPLE_JOBS)} jobs")

        # ── Reviews ────────────────────────────────────────
        existing = await db.execute(select(Review).limit(1))
        if existing.scalar_one_or_none():
            print("  Reviews already exist, skipping...")
        else:
            seeker = users["dev-job-seeker"]
            acme = company_map["Acme Analytics"]
            db.add(Review(
                company_id=acme.id,
                author_id=seeker.id,
                rating=4,
                title="Good engineering culture",
                content="Fast interview loop and clear expectations.",
            ))
            await db.flush()
            print("  Created 1 review")

        await db.commit()
        print()
        print("Seed complete!")
        print("  Mint a token with: python -m scripts.dev_token dev-job-seeker")


if __name__ == "__main__":
    asyncio.run(seed())
