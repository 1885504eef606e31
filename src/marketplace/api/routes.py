"""FastAPI endpoints for the Marketplace domain.

Thin adapters: schema → command → response. The acting member is taken from
the ``X-Member-Id`` header, which the gateway sets after authenticating the
caller.
"""

import json

from fastapi import APIRouter, Depends, Header
from protean.utils.globals import current_domain

from marketplace.api.schemas import (
    CancelPostRequest,
    CompletePostResponse,
    CreatePostRequest,
    EditReviewRequest,
    ExpressInterestRequest,
    InterestResponse,
    MemberActivityResponse,
    MemberIdResponse,
    MemberResponse,
    MemberReviewStatsResponse,
    MemberSummary,
    PostIdResponse,
    PostResponse,
    PurgeExpiredRequest,
    PurgeExpiredResponse,
    RegisterMemberRequest,
    ReviewIdResponse,
    ReviewListResponse,
    ReviewResponse,
    SelectMemberRequest,
    StatusResponse,
    SubmitReviewRequest,
    SuggestionsResponse,
    UpdatePostRequest,
)
from marketplace.errors import AuthorizationError
from marketplace.member.activity import member_activity
from marketplace.member.member import Member
from marketplace.member.registration import RegisterMember
from marketplace.member.suggestions import suggest_members
from marketplace.post.cancellation import CancelPost
from marketplace.post.completion import CompletePost
from marketplace.post.creation import CreatePost
from marketplace.post.editing import UpdatePost
from marketplace.post.expiry import PurgeExpiredPosts
from marketplace.post.interest import ExpressInterest
from marketplace.post.post import Post
from marketplace.post.removal import DeletePost
from marketplace.post.selection import SelectMember
from marketplace.projections.member_review_stats import MemberReviewStats
from marketplace.review.editing import EditReview
from marketplace.review.listing import reviews_received
from marketplace.review.removal import DeleteReview
from marketplace.review.submission import SubmitReview
from marketplace.shared.lookup import load
from marketplace.utils.logging import bind_actor

member_router = APIRouter(prefix="/members", tags=["members"])
post_router = APIRouter(prefix="/posts", tags=["posts"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])


async def acting_member(x_member_id: str | None = Header(None)) -> str:
    """Resolve the acting member from the ``X-Member-Id`` header."""
    if not x_member_id:
        raise AuthorizationError({"member": ["X-Member-Id header is required"]})
    bind_actor(x_member_id)
    return x_member_id


def _json_list(values):
    return json.dumps(values) if values is not None else None


# --- Renderers ---


def _member_response(member) -> MemberResponse:
    return MemberResponse(
        member_id=str(member.id),
        name=member.name,
        email=member.email.address,
        skills=member.skill_list,
        location=member.location,
        bio=member.bio,
        is_active=member.is_active,
        rating=member.rating,
        total_ratings=member.total_ratings,
        completed_exchanges=member.completed_exchanges,
        badges=member.badge_list,
    )


def _post_response(post) -> PostResponse:
    return PostResponse(
        post_id=str(post.id),
        author_id=str(post.author_id),
        title=post.title,
        description=post.description,
        post_type=post.post_type,
        category=post.category,
        skills=post.skill_list,
        location=post.location,
        images=post.image_list,
        offered_skills=post.offered_skill_list,
        budget=post.budget,
        currency=post.currency,
        status=post.status,
        interests=[
            InterestResponse(member_id=str(i.member_id), message=i.message, expressed_at=i.expressed_at)
            for i in post.interested
        ],
        selected_member_id=str(post.selected_member_id) if post.selected_member_id else None,
        expires_at=post.expires_at,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _review_response(review) -> ReviewResponse:
    return ReviewResponse(
        review_id=str(review.id),
        reviewer_id=str(review.reviewer_id),
        reviewee_id=str(review.reviewee_id),
        post_id=str(review.post_id),
        rating=review.rating,
        comment=review.comment,
        review_type=review.review_type,
        payment_amount=review.payment_amount,
        categories=review.category_scores,
        is_edited=review.is_edited,
        created_at=review.created_at,
        edited_at=review.edited_at,
    )


# --- Member endpoints ---


@member_router.post("", status_code=201, response_model=MemberIdResponse)
async def register_member(body: RegisterMemberRequest) -> MemberIdResponse:
    command = RegisterMember(
        name=body.name,
        email=body.email,
        skills=json.dumps(body.skills),
        location=body.location,
        bio=body.bio,
    )
    result = current_domain.process(command, asynchronous=False)
    return MemberIdResponse(member_id=result)


@member_router.get("/{member_id}", response_model=MemberResponse)
async def get_member(member_id: str) -> MemberResponse:
    """Member profile with derived reputation."""
    return _member_response(load(Member, member_id, label="member_id"))


@member_router.get("/{member_id}/reviews", response_model=ReviewListResponse)
async def list_member_reviews(member_id: str, limit: int = 10, page: int = 1) -> ReviewListResponse:
    """Reviews the member received, newest first."""
    load(Member, member_id, label="member_id")
    reviews, total = reviews_received(member_id, limit=limit, page=page)
    return ReviewListResponse(
        reviews=[_review_response(r) for r in reviews],
        total=total,
        page=page,
        limit=limit,
    )


@member_router.get("/{member_id}/review-stats", response_model=MemberReviewStatsResponse)
async def get_member_review_stats(member_id: str) -> MemberReviewStatsResponse:
    load(Member, member_id, label="member_id")
    stats = current_domain.repository_for(MemberReviewStats)._dao.query.filter(member_id=member_id).all().items
    if not stats:
        # No review events for this member yet
        return MemberReviewStatsResponse(
            member_id=member_id,
            total_reviews=0,
            average_rating=0.0,
            rating_distribution={str(star): 0 for star in range(1, 6)},
            category_averages={},
        )
    row = stats[0]
    return MemberReviewStatsResponse(
        member_id=str(row.member_id),
        total_reviews=row.total_reviews,
        average_rating=row.average_rating,
        rating_distribution=json.loads(row.rating_distribution),
        category_averages=json.loads(row.category_averages),
    )


@member_router.get("/{member_id}/stats", response_model=MemberActivityResponse)
async def get_member_activity(member_id: str) -> MemberActivityResponse:
    """Posts created, exchanges completed and completion rate."""
    return MemberActivityResponse(**member_activity(member_id))


# --- Post endpoints ---


@post_router.post("", status_code=201, response_model=PostIdResponse)
async def create_post(body: CreatePostRequest, member_id: str = Depends(acting_member)) -> PostIdResponse:
    command = CreatePost(
        author_id=member_id,
        title=body.title,
        description=body.description,
        post_type=body.post_type,
        category=body.category,
        skills=json.dumps(body.skills),
        location=body.location,
        budget=body.budget,
        offered_skills=_json_list(body.offered_skills),
        images=_json_list(body.images),
    )
    result = current_domain.process(command, asynchronous=False)
    return PostIdResponse(post_id=result)


@post_router.post("/maintenance/purge-expired", response_model=PurgeExpiredResponse)
async def purge_expired_posts(body: PurgeExpiredRequest | None = None) -> PurgeExpiredResponse:
    """Remove open posts past their expiry. Called by an external scheduler."""
    as_of = body.as_of if body else None
    purged = current_domain.process(PurgeExpiredPosts(as_of=as_of), asynchronous=False)
    return PurgeExpiredResponse(purged=purged)


@post_router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str) -> PostResponse:
    return _post_response(load(Post, post_id, label="post_id"))


@post_router.put("/{post_id}", response_model=StatusResponse)
async def update_post(
    post_id: str, body: UpdatePostRequest, member_id: str = Depends(acting_member)
) -> StatusResponse:
    command = UpdatePost(
        post_id=post_id,
        member_id=member_id,
        title=body.title,
        description=body.description,
        skills=_json_list(body.skills),
        location=body.location,
        budget=body.budget,
        offered_skills=_json_list(body.offered_skills),
        images=_json_list(body.images),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@post_router.delete("/{post_id}", response_model=StatusResponse)
async def delete_post(post_id: str, member_id: str = Depends(acting_member)) -> StatusResponse:
    current_domain.process(DeletePost(post_id=post_id, member_id=member_id), asynchronous=False)
    return StatusResponse()


@post_router.post("/{post_id}/interests", status_code=201, response_model=StatusResponse)
async def express_interest(
    post_id: str, body: ExpressInterestRequest | None = None, member_id: str = Depends(acting_member)
) -> StatusResponse:
    command = ExpressInterest(
        post_id=post_id,
        member_id=member_id,
        message=body.message if body else None,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@post_router.put("/{post_id}/selection", response_model=StatusResponse)
async def select_member(
    post_id: str, body: SelectMemberRequest, member_id: str = Depends(acting_member)
) -> StatusResponse:
    command = SelectMember(
        post_id=post_id,
        member_id=member_id,
        selected_member_id=body.selected_member_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@post_router.put("/{post_id}/complete", response_model=CompletePostResponse)
async def complete_post(post_id: str, member_id: str = Depends(acting_member)) -> CompletePostResponse:
    credited = current_domain.process(CompletePost(post_id=post_id, member_id=member_id), asynchronous=False)
    return CompletePostResponse(credited_member_id=credited)


@post_router.put("/{post_id}/cancel", response_model=StatusResponse)
async def cancel_post(
    post_id: str, body: CancelPostRequest | None = None, member_id: str = Depends(acting_member)
) -> StatusResponse:
    command = CancelPost(
        post_id=post_id,
        member_id=member_id,
        reason=body.reason if body else None,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@post_router.get("/{post_id}/suggestions", response_model=SuggestionsResponse)
async def get_suggestions(post_id: str) -> SuggestionsResponse:
    members = suggest_members(post_id)
    return SuggestionsResponse(
        post_id=post_id,
        suggestions=[
            MemberSummary(
                member_id=str(m.id),
                name=m.name,
                skills=m.skill_list,
                rating=m.rating,
                completed_exchanges=m.completed_exchanges,
                badges=m.badge_list,
            )
            for m in members
        ],
    )


# --- Review endpoints ---


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest, member_id: str = Depends(acting_member)) -> ReviewIdResponse:
    command = SubmitReview(
        post_id=body.post_id,
        reviewer_id=member_id,
        reviewee_id=body.reviewee_id,
        rating=body.rating,
        review_type=body.review_type,
        comment=body.comment,
        categories=body.categories.model_dump_json(exclude_none=True) if body.categories else None,
        payment_amount=body.payment_amount,
    )
    result = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=result)


@review_router.put("/{review_id}", response_model=StatusResponse)
async def edit_review(
    review_id: str, body: EditReviewRequest, member_id: str = Depends(acting_member)
) -> StatusResponse:
    command = EditReview(
        review_id=review_id,
        member_id=member_id,
        rating=body.rating,
        comment=body.comment,
        categories=body.categories.model_dump_json(exclude_none=True) if body.categories else None,
        payment_amount=body.payment_amount,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, member_id: str = Depends(acting_member)) -> StatusResponse:
    current_domain.process(DeleteReview(review_id=review_id, member_id=member_id), asynchronous=False)
    return StatusResponse()
