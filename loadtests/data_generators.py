"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
(EmailAddress VO, title and description bounds, post type terms) and match
the field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")

SKILLS = [
    "Python",
    "React",
    "Logo Design",
    "Copywriting",
    "Photography",
    "Guitar",
    "Tabla",
    "Calculus",
    "SEO",
    "Video Editing",
]

CATEGORIES = [
    "academic",
    "design",
    "programming",
    "writing",
    "marketing",
    "photography",
    "music",
    "art",
    "tutoring",
    "consulting",
    "other",
]


def valid_email() -> str:
    """Generate emails that pass EmailAddress VO validation and stay unique."""
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@example.com"


def member_data(skills: list[str] | None = None) -> dict:
    """Generate RegisterMemberRequest payload."""
    return {
        "name": fake.name()[:50],
        "email": valid_email(),
        "skills": skills or random.sample(SKILLS, k=2),
        "location": fake.city()[:255],
        "bio": fake.sentence(nb_words=12)[:500],
    }


def post_data(post_type: str | None = None) -> dict:
    """Generate CreatePostRequest payload with terms matching the post type."""
    post_type = post_type or random.choice(["barter", "paid"])
    wanted, offered = random.sample(SKILLS, k=2)
    payload = {
        "title": f"{wanted} help wanted"[:100],
        "description": fake.paragraph(nb_sentences=3)[:1000].ljust(20, "."),
        "post_type": post_type,
        "category": random.choice(CATEGORIES),
        "skills": [wanted],
        "location": fake.city()[:255],
    }
    if post_type == "paid":
        payload["budget"] = float(random.randint(5, 200) * 100)
    else:
        payload["offered_skills"] = [offered]
    return payload


def review_data(post_id: str, reviewee_id: str) -> dict:
    """Generate SubmitReviewRequest payload."""
    return {
        "post_id": post_id,
        "reviewee_id": reviewee_id,
        "rating": random.randint(1, 5),
        "comment": fake.sentence(nb_words=10)[:500],
        "categories": {
            "communication": random.randint(1, 5),
            "quality": random.randint(1, 5),
        },
    }
