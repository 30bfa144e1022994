from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from sqlalchemy import select
from ..db import get_db
from ..models import AIResponse, Caption, MonetizationInsight, Hashtag, Profile
from ..schemas import (
    GenerateRequest, AIResponseIn, AIResponseOut, CaptionSaveIn, HashtagsSaveIn,
    CommentResponseSaveIn, RepurposedSaveIn, InsightSaveIn, InsightOut, HashtagOut,
)
from ..services.llm import generate_content
from ..services.content_parsing import parse_estimated_value
from ..security.auth import require_user
from ..logging_setup import log_event

router = APIRouter(tags=["content"])

@router.post("/api/ai-content-generator")
async def ai_content_generator(request: Request):
    """
    Prompt dispatcher. Returns {"result": ...} on success; any failure
    (unreadable body, missing key, upstream error, malformed reply) becomes
    a 500 {"error": message}.
    """
    content_type = None
    try:
        payload = GenerateRequest.model_validate(await request.json())
        content_type = payload.type
        result = await run_in_threadpool(
            generate_content,
            payload.type,
            payload.prompt,
            platform=payload.platform,
            content_length=payload.content_length,
        )
    except Exception as e:
        log_event("ai_generate_fail", level="error", content_type=content_type, error=str(e))
        return JSONResponse(status_code=500, content={"error": str(e)})

    log_event("ai_generate_success", content_type=content_type)
    return {"result": result}

def _log_response(db: Session, user_id: int, response_type: str, content: str, metadata: dict | None) -> AIResponse:
    if not content or not content.strip():
        raise HTTPException(status_code=400, detail="Nothing to save: generate some content first.")
    record = AIResponse(user_id=user_id, response_type=response_type, content=content, response_metadata=metadata)
    db.add(record)
    return record

def _commit(db: Session, record: AIResponse, user_id: int) -> AIResponse:
    db.commit()
    db.refresh(record)
    log_event("ai_response_saved", user_id=user_id, response_type=record.response_type, response_id=record.id)
    return record

@router.get("/ai-responses", response_model=list[AIResponseOut])
def list_ai_responses(
    response_type: str | None = None,
    limit: int = 50,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    stmt = select(AIResponse).where(AIResponse.user_id == user.id).order_by(AIResponse.created_at.desc(), AIResponse.id.desc())
    if response_type:
        stmt = stmt.where(AIResponse.response_type == response_type)
    limit = max(1, min(limit, 200))
    return db.execute(stmt.limit(limit)).scalars().all()

@router.post("/ai-responses", response_model=AIResponseOut)
def save_ai_response(
    payload: AIResponseIn,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    record = _log_response(db, user.id, payload.response_type, payload.content, payload.metadata)
    return _commit(db, record, user.id)

@router.post("/content/captions", response_model=AIResponseOut)
def save_caption(
    payload: CaptionSaveIn,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    record = _log_response(db, user.id, "caption", payload.caption, {"original_prompt": payload.prompt})
    db.add(Caption(user_id=user.id, content=payload.caption, theme=payload.prompt))
    return _commit(db, record, user.id)

@router.post("/content/hashtags", response_model=AIResponseOut)
def save_hashtags(
    payload: HashtagsSaveIn,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    tags = [t.strip() for t in payload.hashtags if t and t.strip()]
    record = _log_response(db, user.id, "hashtags", ",".join(tags), {"original_content": payload.content})
    return _commit(db, record, user.id)

@router.post("/content/comment-responses", response_model=AIResponseOut)
def save_comment_response(
    payload: CommentResponseSaveIn,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    record = _log_response(db, user.id, "comment_response", payload.response, {"original_comment": payload.comment})
    return _commit(db, record, user.id)

@router.post("/content/repurposed", response_model=AIResponseOut)
def save_repurposed(
    payload: RepurposedSaveIn,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    record = _log_response(db, user.id, "repurposed_content", payload.content, {
        "original_content": payload.original_content,
        "platform": payload.platform,
        "content_length": payload.content_length,
    })
    return _commit(db, record, user.id)

@router.post("/content/insights", response_model=InsightOut)
def save_insight(
    payload: InsightSaveIn,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    if not payload.title.strip():
        raise HTTPException(status_code=400, detail="Insight title is required.")

    _log_response(db, user.id, "monetization_insight", payload.description or payload.title, {
        "title": payload.title,
        "estimated_value": payload.estimated_value,
        "original_profile": payload.profile,
    })
    insight = MonetizationInsight(
        user_id=user.id,
        insight_type="opportunity",
        title=payload.title,
        description=payload.description,
        estimated_value=parse_estimated_value(payload.estimated_value),
    )
    db.add(insight)
    db.commit()
    db.refresh(insight)
    log_event("insight_saved", user_id=user.id, insight_id=insight.id)
    return insight

@router.get("/content/insights", response_model=list[InsightOut])
def list_insights(
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    stmt = select(MonetizationInsight).where(MonetizationInsight.user_id == user.id).order_by(MonetizationInsight.created_at.desc(), MonetizationInsight.id.desc())
    return db.execute(stmt).scalars().all()

@router.post("/content/insights/{insight_id}/implemented", response_model=InsightOut)
def mark_insight_implemented(
    insight_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    insight = db.query(MonetizationInsight).filter(
        MonetizationInsight.id == insight_id,
        MonetizationInsight.user_id == user.id
    ).first()
    if not insight:
        raise HTTPException(status_code=404, detail="Insight not found")
    insight.is_implemented = True
    db.commit()
    db.refresh(insight)
    return insight

@router.get("/hashtags/trending", response_model=list[HashtagOut])
def trending_hashtags(
    category: str | None = None,
    limit: int = 20,
    db: Session = Depends(get_db),
):
    stmt = select(Hashtag).where(Hashtag.trending == True).order_by(Hashtag.trend_score.desc(), Hashtag.name.asc())
    if category:
        stmt = stmt.where(Hashtag.category == category)
    limit = max(1, min(limit, 100))
    return db.execute(stmt.limit(limit)).scalars().all()
