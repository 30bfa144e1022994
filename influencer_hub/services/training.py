# Copyright (c) 2026 Mohammed Hassan. All rights reserved.
# Proprietary and confidential. Unauthorized copying, modification, distribution, or use is prohibited.

from datetime import datetime, timedelta, timezone
from sqlalchemy.orm import Session
from influencer_hub.models import TrainingJob
from influencer_hub.logging_setup import log_event

PROGRESS_STEP = 5
TICK = timedelta(milliseconds=300)

def _utcnow():
    return datetime.now(timezone.utc)

def compute_progress(started_at: datetime, now: datetime | None = None) -> int:
    """Fixed-interval progress: +5 every 300ms, capped at 100."""
    now = now or _utcnow()
    if started_at.tzinfo is None:
        # SQLite hands back naive datetimes
        started_at = started_at.replace(tzinfo=timezone.utc)
    elapsed = max(timedelta(0), now - started_at)
    return min(100, PROGRESS_STEP * (elapsed // TICK))

def training_status(progress: int) -> str:
    return "complete" if progress >= 100 else "training"

def job_out(job, now: datetime | None = None) -> dict:
    progress = compute_progress(job.started_at, now)
    return {
        "id": job.id,
        "kind": job.kind,
        "file_urls": job.file_urls or [],
        "started_at": job.started_at,
        "progress": progress,
        "status": training_status(progress),
    }

def start_training_job(db: Session, user_id: int, kind: str, file_urls: list[str]) -> TrainingJob:
    """Records a training run. Callers commit."""
    job = TrainingJob(user_id=user_id, kind=kind, file_urls=file_urls, started_at=_utcnow())
    db.add(job)
    db.flush()
    log_event("training_start", user_id=user_id, kind=kind, job_id=job.id, file_count=len(file_urls))
    return job
