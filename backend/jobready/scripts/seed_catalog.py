"""
Seed the training catalog and a handful of demo job postings.

Usage:
  python -m jobready.scripts.seed_catalog

Each table is only seeded when empty, so re-running is harmless.
"""
import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from jobready.database import SessionLocal, init_db
from jobready.logging_config import setup_logging
from jobready.models.job import Job
from jobready.models.training import TrainingCourse, TrainingModule

logger = logging.getLogger(__name__)

DEFAULT_COURSES = [
    {
        "title": "Customer Service Basics",
        "description": "Greeting customers, handling complaints and closing a sale.",
        "category": "customer-service",
        "difficulty_level": "beginner",
        "duration_hours": 4,
        "language": "en",
        "modules": ["Welcoming customers", "Handling complaints", "Following up"],
    },
    {
        "title": "Ukubhala i-CV",
        "description": "Indlela yokubhala i-CV ehlaba umxhwele.",
        "category": "cv-writing",
        "difficulty_level": "beginner",
        "duration_hours": 2,
        "language": "zu",
        "modules": ["Imininingwane yakho", "Imfundo nolwazi", "Amakhono"],
    },
    {
        "title": "Interview Skills",
        "description": "Preparing for interviews and answering common questions.",
        "category": "interview-skills",
        "difficulty_level": "intermediate",
        "duration_hours": 3,
        "language": "en",
        "modules": ["Research the employer", "Common questions", "After the interview"],
    },
    {
        "title": "Digital Literacy",
        "description": "Email, smartphones and searching for jobs online.",
        "category": "digital-literacy",
        "difficulty_level": "beginner",
        "duration_hours": 5,
        "language": "st",
        "modules": ["Using email", "Searching online", "Staying safe online"],
    },
]

DEFAULT_JOBS = [
    {
        "title": "Cashier",
        "company_name": "Shoprite",
        "location": "Soweto, Johannesburg",
        "job_type": "full-time",
        "salary_min": 4500,
        "salary_max": 6000,
        "description": "Operate tills and assist customers at the front end.",
        "requirements": "Matric. Basic numeracy.",
        "responsibilities": "Handle cash accurately. Keep the till area tidy.",
        "language": "en",
    },
    {
        "title": "General Worker",
        "company_name": "Bidvest",
        "location": "Durban",
        "job_type": "contract",
        "salary_min": 3500,
        "salary_max": 4500,
        "description": "Warehouse packing and loading.",
        "requirements": "Physically fit.",
        "responsibilities": "Pack and load orders.",
        "language": "zu",
    },
    {
        "title": "Call Centre Agent",
        "company_name": "Vodacom",
        "location": "Midrand",
        "job_type": "full-time",
        "salary_min": 6000,
        "salary_max": 8500,
        "description": "Answer customer queries in English and Setswana.",
        "requirements": "Matric. Fluent in Setswana.",
        "responsibilities": "Resolve queries on first call.",
        "language": "tn",
    },
]


def seed_courses(db: Session) -> int:
    if db.query(TrainingCourse.id).first():
        return 0
    for entry in DEFAULT_COURSES:
        fields = {k: v for k, v in entry.items() if k != "modules"}
        course = TrainingCourse(**fields)
        course.modules = [
            TrainingModule(title=title, order_index=i, duration_minutes=30)
            for i, title in enumerate(entry["modules"], start=1)
        ]
        db.add(course)
    db.commit()
    return len(DEFAULT_COURSES)


def seed_jobs(db: Session, today: date | None = None) -> int:
    if db.query(Job.id).first():
        return 0
    deadline = (today or date.today()) + timedelta(days=30)
    for entry in DEFAULT_JOBS:
        db.add(Job(application_deadline=deadline, **entry))
    db.commit()
    return len(DEFAULT_JOBS)


def main():
    setup_logging()
    init_db()
    db = SessionLocal()
    try:
        courses = seed_courses(db)
        jobs = seed_jobs(db)
        logger.info("Seed complete: courses=%d jobs=%d", courses, jobs)
    finally:
        db.close()


if __name__ == "__main__":
    main()
