"""
Script to seed the default role profiles. Existing roles are skipped.
Run: python -m scripts.seed_roles
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.db.session import SessionLocal
from app.db.init_db import init_db
from app.db.models.role_profile import RoleProfile
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def structure(technical, hr, manager, cto, case, difficulty="full-time-fresher"):
    return {
        "technical": {"question_count": technical, "difficulty": difficulty},
        "hr": {"question_count": hr},
        "manager": {"question_count": manager},
        "cto": {"question_count": cto},
        "case": {"question_count": case},
    }


DEFAULT_ROLES = [
    {
        "role_name": "Software Developer",
        "domain_tags": ["Software Development", "General Programming"],
        "skill_expectations": ["Problem Solving", "Data Structures", "Algorithms", "OOP", "Version Control"],
        "interview_structures": structure(6, 5, 4, 3, 2),
    },
    {
        "role_name": "Java Developer",
        "domain_tags": ["Java", "Backend", "Enterprise"],
        "skill_expectations": ["Java", "Spring Boot", "Hibernate", "Maven", "REST APIs", "Microservices"],
        "interview_structures": structure(7, 5, 3, 3, 2),
    },
    {
        "role_name": "MERN Stack Developer",
        "domain_tags": ["MongoDB", "Express", "React", "Node.js", "Full Stack"],
        "skill_expectations": ["JavaScript", "React", "Node.js", "Express", "MongoDB", "REST APIs", "State Management"],
        "interview_structures": structure(8, 5, 4, 3, 2),
    },
    {
        "role_name": "Android Developer",
        "domain_tags": ["Android", "Mobile", "Kotlin", "Java"],
        "skill_expectations": ["Android SDK", "Kotlin/Java", "Material Design", "REST APIs", "MVVM", "Room Database"],
        "interview_structures": structure(7, 5, 3, 3, 2),
    },
    {
        "role_name": "Kotlin Developer",
        "domain_tags": ["Kotlin", "Android", "Backend"],
        "skill_expectations": ["Kotlin", "Coroutines", "Ktor", "Spring Boot", "Functional Programming"],
        "interview_structures": structure(7, 5, 3, 3, 2),
    },
    {
        "role_name": "Web Frontend Developer",
        "domain_tags": ["Frontend", "JavaScript", "React", "Vue", "Angular"],
        "skill_expectations": ["HTML", "CSS", "JavaScript", "React/Vue/Angular", "Responsive Design", "State Management"],
        "interview_structures": structure(7, 5, 3, 3, 2),
    },
    {
        "role_name": "Backend Developer",
        "domain_tags": ["Backend", "API", "Server", "Database"],
        "skill_expectations": ["Node.js", "Python", "REST APIs", "Database Design", "Caching", "Microservices"],
        "interview_structures": structure(7, 5, 4, 4, 2),
    },
    {
        "role_name": "Full Stack Developer",
        "domain_tags": ["Full Stack", "Frontend", "Backend", "Full Cycle"],
        "skill_expectations": ["Frontend Frameworks", "Backend Technologies", "Database", "DevOps Basics", "API Design"],
        "interview_structures": structure(8, 5, 4, 4, 3),
    },
    {
        "role_name": "Data Analyst",
        "domain_tags": ["Data Analysis", "Analytics", "SQL", "Excel"],
        "skill_expectations": ["SQL", "Python/R", "Excel", "Data Visualization", "Statistical Analysis", "Tableau/Power BI"],
        "interview_structures": structure(6, 5, 4, 2, 5),
    },
    {
        "role_name": "Quantitative Analyst",
        "domain_tags": ["Quantitative", "Finance", "Mathematics", "Statistics"],
        "skill_expectations": ["Python", "R", "Mathematical Modeling", "Statistics", "Financial Markets", "Risk Analysis"],
        "interview_structures": structure(7, 5, 4, 3, 6, difficulty="experience-3-years"),
    },
    {
        "role_name": "Business Analyst",
        "domain_tags": ["Business Analysis", "Consulting", "Requirements"],
        "skill_expectations": ["Requirements Gathering", "Process Analysis", "SQL", "Documentation", "Stakeholder Management"],
        "interview_structures": structure(4, 6, 5, 2, 7),
    },
    {
        "role_name": "Consulting Analyst",
        "domain_tags": ["Consulting", "Strategy", "Problem Solving"],
        "skill_expectations": ["Problem Solving", "Analytical Thinking", "Communication", "Business Acumen", "Case Analysis"],
        "interview_structures": structure(3, 6, 5, 2, 8),
    },
]


def seed_roles(db) -> int:
    """Insert missing default roles. Returns the number created."""
    created = 0
    for role_data in DEFAULT_ROLES:
        existing = db.query(RoleProfile).filter(RoleProfile.role_name == role_data["role_name"]).first()
        if existing:
            logger.info(f"Skipped (exists): {role_data['role_name']}")
            continue
        db.add(RoleProfile(**role_data))
        created += 1
        logger.info(f"Created: {role_data['role_name']}")
    db.commit()
    return created


if __name__ == "__main__":
    init_db()
    db = SessionLocal()
    try:
        count = seed_roles(db)
        print(f"\n[SUCCESS] Seeded {count} role profile(s)")
    except Exception as e:
        db.rollback()
        logger.error(f"Seeding failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        db.close()
