"""Pydantic request/response schemas for the Marketplace API.

Request schemas only shape the payload; business rules (title length, budget
by post type, review eligibility) are enforced by the domain.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Member Schemas ---


class RegisterMemberRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Rao",
                    "email": "asha@example.com",
                    "skills": ["Python", "Data Analysis"],
                    "location": "Bengaluru",
                    "bio": "Analyst who likes teaching pandas.",
                }
            ]
        }
    }

    name: str = Field(..., max_length=50)
    email: str = Field(..., max_length=254)
    skills: list[str] = Field(default_factory=list)
    location: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=500)


class MemberIdResponse(BaseModel):
    member_id: str


class MemberResponse(BaseModel):
    member_id: str
    name: str
    email: str
    skills: list[str]
    location: str | None = None
    bio: str | None = None
    is_active: bool
    rating: float
    total_ratings: int
    completed_exchanges: int
    badges: list[str]


class MemberSummary(BaseModel):
    member_id: str
    name: str
    skills: list[str]
    rating: float
    completed_exchanges: int
    badges: list[str]


# --- Post Schemas ---


class CreatePostRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Logo design for Python tutoring",
                    "description": "I will tutor you in Python for two sessions in exchange for a logo.",
                    "post_type": "barter",
                    "category": "design",
                    "skills": ["Logo Design"],
                    "location": "Pune",
                    "offered_skills": ["Python"],
                }
            ]
        }
    }

    title: str = Field(..., max_length=100)
    description: str
    post_type: str = Field(..., examples=["barter", "paid"])
    category: str = Field(..., max_length=20)
    skills: list[str]
    location: str = Field(..., max_length=255)
    budget: float | None = None
    offered_skills: list[str] | None = None
    images: list[str] | None = None


class UpdatePostRequest(BaseModel):
    title: str | None = Field(None, max_length=100)
    description: str | None = None
    skills: list[str] | None = None
    location: str | None = Field(None, max_length=255)
    budget: float | None = None
    offered_skills: list[str] | None = None
    images: list[str] | None = None


class ExpressInterestRequest(BaseModel):
    message: str | None = Field(None, max_length=200)


class SelectMemberRequest(BaseModel):
    selected_member_id: str


class CancelPostRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


class PurgeExpiredRequest(BaseModel):
    as_of: datetime | None = None


class PostIdResponse(BaseModel):
    post_id: str


class InterestResponse(BaseModel):
    member_id: str
    message: str | None = None
    expressed_at: datetime


class PostResponse(BaseModel):
    post_id: str
    author_id: str
    title: str
    description: str
    post_type: str
    category: str
    skills: list[str]
    location: str
    images: list[str]
    offered_skills: list[str]
    budget: float | None = None
    currency: str | None = None
    status: str
    interests: list[InterestResponse]
    selected_member_id: str | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CompletePostResponse(BaseModel):
    status: str = "ok"
    credited_member_id: str


class PurgeExpiredResponse(BaseModel):
    purged: int


class SuggestionsResponse(BaseModel):
    post_id: str
    suggestions: list[MemberSummary]


# --- Review Schemas ---


class ScoreBreakdownSchema(BaseModel):
    communication: int | None = Field(None, ge=1, le=5)
    quality: int | None = Field(None, ge=1, le=5)
    timeliness: int | None = Field(None, ge=1, le=5)
    professionalism: int | None = Field(None, ge=1, le=5)


class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "post_id": "post-001",
                    "reviewee_id": "member-002",
                    "rating": 5,
                    "comment": "Delivered ahead of schedule.",
                    "categories": {"communication": 5, "timeliness": 5},
                }
            ]
        }
    }

    post_id: str
    reviewee_id: str
    rating: int
    comment: str | None = Field(None, max_length=500)
    review_type: str | None = None
    categories: ScoreBreakdownSchema | None = None
    payment_amount: float | None = None


class EditReviewRequest(BaseModel):
    rating: int | None = None
    comment: str | None = Field(None, max_length=500)
    categories: ScoreBreakdownSchema | None = None
    payment_amount: float | None = None


class ReviewIdResponse(BaseModel):
    review_id: str


class ReviewResponse(BaseModel):
    review_id: str
    reviewer_id: str
    reviewee_id: str
    post_id: str
    rating: int
    comment: str | None = None
    review_type: str
    payment_amount: float | None = None
    categories: dict[str, int]
    is_edited: bool
    created_at: datetime | None = None
    edited_at: datetime | None = None


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]
    total: int
    page: int
    limit: int


class MemberReviewStatsResponse(BaseModel):
    member_id: str
    total_reviews: int
    average_rating: float
    rating_distribution: dict[str, int]
    category_averages: dict[str, float]


class MemberActivityResponse(BaseModel):
    member_id: str
    total_reviews: int
    average_rating: float
    posts_created: int
    posts_completed: int
    completion_rate: float


# --- Shared ---


class StatusResponse(BaseModel):
    status: str = "ok"
