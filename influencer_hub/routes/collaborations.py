from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import select
from ..db import get_db
from ..models import BrandCollaboration, CollaborationApplication, Profile
from ..schemas import CollaborationCreate, CollaborationOut, ApplicationIn, ApplicationOut, ApplicationStatusIn
from ..services.marketplace import format_collaboration_type, search_filter, COLLABORATION_TYPES, REVIEW_DECISIONS
from ..security.auth import require_user
from ..logging_setup import log_event

router = APIRouter(prefix="/collaborations", tags=["collaborations"])

def _collaboration_out(c: BrandCollaboration) -> dict:
    return {
        "id": c.id,
        "brand_name": c.brand_name,
        "brand_description": c.brand_description,
        "collaboration_type": c.collaboration_type,
        "type_label": format_collaboration_type(c.collaboration_type),
        "requirements": c.requirements,
        "compensation": c.compensation,
        "is_active": c.is_active,
        "created_by": c.created_by,
        "created_at": c.created_at,
    }

def _application_out(a: CollaborationApplication) -> dict:
    return {
        "id": a.id,
        "collaboration_id": a.collaboration_id,
        "user_id": a.user_id,
        "message": a.message,
        "status": a.status,
        "brand_name": a.collaboration.brand_name if a.collaboration else None,
        "created_at": a.created_at,
    }

@router.get("", response_model=list[CollaborationOut])
def list_collaborations(
    q: str | None = None,
    db: Session = Depends(get_db),
):
    """Active collaborations, newest first, optionally filtered by a search term."""
    stmt = select(BrandCollaboration).where(BrandCollaboration.is_active == True).order_by(
        BrandCollaboration.created_at.desc(), BrandCollaboration.id.desc()
    )
    match = search_filter(q)
    if match is not None:
        stmt = stmt.where(match)
    return [_collaboration_out(c) for c in db.execute(stmt).scalars().all()]

@router.post("", response_model=CollaborationOut)
def create_collaboration(
    payload: CollaborationCreate,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    if not payload.brand_name.strip():
        raise HTTPException(status_code=400, detail="Brand name is required.")
    if payload.collaboration_type not in COLLABORATION_TYPES:
        raise HTTPException(status_code=400, detail=f"Collaboration type must be one of: {', '.join(COLLABORATION_TYPES)}")

    data = payload.model_dump()
    data["brand_name"] = data["brand_name"].strip()
    collab = BrandCollaboration(**data, is_active=True, created_by=user.id)
    db.add(collab)
    db.commit()
    db.refresh(collab)
    log_event("collaboration_create", collaboration_id=collab.id, user_id=user.id)
    return _collaboration_out(collab)

@router.get("/applications", response_model=list[ApplicationOut])
def my_applications(
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    stmt = (
        select(CollaborationApplication)
        .options(joinedload(CollaborationApplication.collaboration))
        .where(CollaborationApplication.user_id == user.id)
        .order_by(CollaborationApplication.created_at.desc(), CollaborationApplication.id.desc())
    )
    return [_application_out(a) for a in db.execute(stmt).scalars().all()]

@router.post("/{collaboration_id}/apply", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def apply_to_collaboration(
    collaboration_id: int,
    payload: ApplicationIn,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    if not payload.message.strip():
        raise HTTPException(status_code=400, detail="Please enter a message to the brand")

    collab = db.get(BrandCollaboration, collaboration_id)
    if not collab or not collab.is_active:
        raise HTTPException(status_code=404, detail="Collaboration not found")

    existing = db.query(CollaborationApplication).filter(
        CollaborationApplication.collaboration_id == collaboration_id,
        CollaborationApplication.user_id == user.id
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="You have already applied to this collaboration")

    application = CollaborationApplication(
        collaboration_id=collaboration_id,
        user_id=user.id,
        message=payload.message.strip(),
        status="pending",
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    log_event("collaboration_apply", collaboration_id=collaboration_id, user_id=user.id)
    return _application_out(application)

@router.patch("/applications/{application_id}", response_model=ApplicationOut)
def set_application_status(
    application_id: int,
    payload: ApplicationStatusIn,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    """Approve or reject an application. Only the collaboration's creator may decide."""
    if payload.status not in REVIEW_DECISIONS:
        raise HTTPException(status_code=400, detail=f"Status must be one of: {', '.join(REVIEW_DECISIONS)}")

    application = db.get(CollaborationApplication, application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    if application.collaboration.created_by != user.id:
        raise HTTPException(status_code=403, detail="Only the brand that posted this collaboration can review applications")

    application.status = payload.status
    db.commit()
    db.refresh(application)
    log_event("collaboration_review", application_id=application.id, status=application.status)
    return _application_out(application)

@router.delete("/{collaboration_id}")
def close_collaboration(
    collaboration_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    """Marks the collaboration inactive so it drops out of the listing."""
    collab = db.get(BrandCollaboration, collaboration_id)
    if not collab or collab.created_by != user.id:
        raise HTTPException(status_code=404, detail="Collaboration not found")
    collab.is_active = False
    db.commit()
    return {"ok": True}
