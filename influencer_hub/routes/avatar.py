from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from sqlalchemy import select
from sqlalchemy.orm import Session
from ..db import get_db
from ..models import TrainingJob, Profile
from ..schemas import TrainingJobOut
from ..services.uploads import check_upload_types, save_upload, VIDEO_TYPES, IMAGE_TYPES
from ..services.training import start_training_job, job_out
from ..security.auth import require_user

router = APIRouter(tags=["avatar"])

@router.post("/avatar/media", response_model=TrainingJobOut)
def upload_avatar_media(
    files: list[UploadFile] = File(default=[]),
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    """Uploads videos/photos for avatar training. The first photo becomes the profile picture."""
    if not files:
        raise HTTPException(status_code=400, detail="No files selected: please select at least one video or photo to upload for training.")

    allowed = VIDEO_TYPES + IMAGE_TYPES
    check_upload_types(files, allowed)
    urls = []
    avatar_url = None
    for f in files:
        url, _ = save_upload(f, "avatar", allowed)
        urls.append(url)
        if avatar_url is None and f.content_type in IMAGE_TYPES:
            avatar_url = url

    if avatar_url:
        user.avatar_url = avatar_url
    job = start_training_job(db, user.id, "avatar", urls)
    db.commit()
    db.refresh(job)
    return job_out(job)

@router.get("/training-jobs", response_model=list[TrainingJobOut])
def list_training_jobs(
    kind: str | None = None,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    stmt = select(TrainingJob).where(TrainingJob.user_id == user.id).order_by(TrainingJob.started_at.desc(), TrainingJob.id.desc())
    if kind:
        stmt = stmt.where(TrainingJob.kind == kind)
    return [job_out(j) for j in db.execute(stmt).scalars().all()]

@router.get("/training-jobs/{job_id}", response_model=TrainingJobOut)
def get_training_job(
    job_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    job = db.query(TrainingJob).filter(TrainingJob.id == job_id, TrainingJob.user_id == user.id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Training job not found")
    return job_out(job)
