from datetime import datetime, timezone
import pytz
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from ..db import get_db
from ..config import settings
from ..models import PostAutomation, Profile
from ..schemas import PostOut, PostCreate, PostUpdate, GeneratedPostOut, ScheduleIn
from ..services.drafts import DRAFT_PLATFORMS, POST_STATUSES, toggle_platform, default_title, schedule_to_utc, derive_status
from ..services.llm import generate_post_caption
from ..security.auth import require_user
from ..logging_setup import log_event

router = APIRouter(prefix="/posts", tags=["posts"])

# Columns a PATCH may change but never clear
NOT_NULL_FIELDS = ("title", "content_type", "platforms", "media_urls", "media_included", "is_active")

def _utcnow():
    return datetime.now(timezone.utc)

def _get_post(db: Session, post_id: int, user_id: int) -> PostAutomation:
    post = db.query(PostAutomation).filter(PostAutomation.id == post_id, PostAutomation.user_id == user_id).first()
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post

def _check_platforms(platforms: list[str]):
    unknown = [p for p in platforms if p not in DRAFT_PLATFORMS]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unsupported platform(s): {', '.join(unknown)}")

def _apply_schedule(post: PostAutomation, schedule: ScheduleIn | None):
    data = schedule.model_dump(mode="json") if schedule else None
    try:
        post.scheduled_at = schedule_to_utc(data, settings.timezone)
    except (pytz.UnknownTimeZoneError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid schedule: {e}")
    post.schedule = data
    post.status = derive_status(data)

@router.post("", response_model=PostOut)
def create_post(
    payload: PostCreate,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    content = payload.content.strip()
    platforms = list(dict.fromkeys(payload.platforms))
    if not content or not platforms:
        raise HTTPException(status_code=400, detail="Please add content and select at least one platform.")
    _check_platforms(platforms)

    post = PostAutomation(
        user_id=user.id,
        title=(payload.title or "").strip() or default_title(content),
        content=content,
        content_type=payload.content_type,
        platforms=platforms,
        media_included=payload.media_included,
        media_urls=payload.media_urls,
    )
    _apply_schedule(post, payload.schedule)
    db.add(post)
    db.commit()
    db.refresh(post)

    log_event("post_create", post_id=post.id, user_id=user.id, status=post.status, platforms=platforms)
    return post

@router.post("/generate", response_model=GeneratedPostOut)
def generate_post_content(user: Profile = Depends(require_user)):
    """Drafts post text from the profile's niche and audience. Nothing is saved."""
    try:
        content = generate_post_caption(user)
    except Exception as e:
        log_event("post_generate_fail", level="error", user_id=user.id, error=str(e))
        raise HTTPException(status_code=502, detail=f"Content generation failed: {e}")
    return {"content": content}

@router.get("", response_model=list[PostOut])
def list_posts(
    status: str | None = None,
    limit: int = 50,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    stmt = select(PostAutomation).where(PostAutomation.user_id == user.id).order_by(PostAutomation.created_at.desc(), PostAutomation.id.desc())
    if status:
        if status not in POST_STATUSES:
            raise HTTPException(status_code=400, detail=f"Status must be one of: {', '.join(POST_STATUSES)}")
        stmt = stmt.where(PostAutomation.status == status)
    limit = max(1, min(limit, 200))
    return db.execute(stmt.limit(limit)).scalars().all()

@router.get("/stats")
def post_stats(
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    stmt = select(PostAutomation.status, func.count(PostAutomation.id)).where(PostAutomation.user_id == user.id).group_by(PostAutomation.status)
    return {"counts": {s: count for s, count in db.execute(stmt).all()}}

@router.get("/{post_id}", response_model=PostOut)
def get_post(
    post_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    return _get_post(db, post_id, user.id)

@router.patch("/{post_id}", response_model=PostOut)
def update_post(
    post_id: int,
    payload: PostUpdate,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    post = _get_post(db, post_id, user.id)
    if post.status == "published":
        raise HTTPException(status_code=400, detail="Published posts can't be edited.")

    data = payload.model_dump(exclude_unset=True)
    nulls = [k for k in NOT_NULL_FIELDS if k in data and data[k] is None]
    if nulls:
        raise HTTPException(status_code=400, detail=f"These fields can't be empty: {', '.join(nulls)}")
    if "content" in data and not (data["content"] or "").strip():
        raise HTTPException(status_code=400, detail="Post content can't be empty.")
    if "platforms" in data:
        data["platforms"] = list(dict.fromkeys(data["platforms"]))
        if not data["platforms"]:
            raise HTTPException(status_code=400, detail="Select at least one platform.")
        _check_platforms(data["platforms"])

    schedule_set = "schedule" in data
    data.pop("schedule", None)
    for k, v in data.items():
        setattr(post, k, v)
    if schedule_set:
        _apply_schedule(post, payload.schedule)

    db.commit()
    db.refresh(post)
    return post

@router.post("/{post_id}/platforms/{platform}/toggle", response_model=PostOut)
def toggle_post_platform(
    post_id: int,
    platform: str,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    post = _get_post(db, post_id, user.id)
    _check_platforms([platform])
    # Reassign so the JSON column is flagged dirty
    post.platforms = toggle_platform(post.platforms, platform)
    db.commit()
    db.refresh(post)
    return post

@router.post("/{post_id}/publish", response_model=PostOut)
def publish_post(
    post_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    post = _get_post(db, post_id, user.id)
    if not post.content or not post.platforms:
        raise HTTPException(status_code=422, detail="Publishing impossible: content or platforms missing.")
    post.status = "published"
    post.published_at = _utcnow()
    db.commit()
    db.refresh(post)
    log_event("post_publish", post_id=post.id, user_id=user.id, platforms=post.platforms)
    return post

@router.delete("/{post_id}")
def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    post = _get_post(db, post_id, user.id)
    db.delete(post)
    db.commit()
    return {"ok": True, "message": f"Post {post_id} deleted"}
