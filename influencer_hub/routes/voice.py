from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from sqlalchemy.orm import Session
from ..db import get_db
from ..models import VoiceSettings, Profile
from ..schemas import VoiceSettingsOut, VoiceSettingsUpdate, TrainingJobOut
from ..services.uploads import check_upload_types, save_upload, AUDIO_TYPES
from ..services.training import start_training_job, job_out
from ..security.auth import require_user

router = APIRouter(prefix="/voice", tags=["voice"])

def _get_or_create_settings(db: Session, user_id: int) -> VoiceSettings:
    vs = db.query(VoiceSettings).filter(VoiceSettings.user_id == user_id).first()
    if not vs:
        vs = VoiceSettings(user_id=user_id, pitch=50, speed=50, clarity=75)
        db.add(vs)
        db.commit()
        db.refresh(vs)
    return vs

@router.get("/settings", response_model=VoiceSettingsOut)
def get_voice_settings(
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    return _get_or_create_settings(db, user.id)

@router.patch("/settings", response_model=VoiceSettingsOut)
def update_voice_settings(
    payload: VoiceSettingsUpdate,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    vs = _get_or_create_settings(db, user.id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        if v is not None:
            setattr(vs, k, v)
    db.commit()
    db.refresh(vs)
    return vs

@router.post("/samples", response_model=TrainingJobOut)
def upload_voice_samples(
    files: list[UploadFile] = File(default=[]),
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    """Stores recorded or uploaded audio and starts refining the voice model."""
    if not files:
        raise HTTPException(status_code=400, detail="No audio samples: please record or upload at least one audio sample.")

    check_upload_types(files, AUDIO_TYPES)
    urls = [save_upload(f, "voice", AUDIO_TYPES)[0] for f in files]

    vs = _get_or_create_settings(db, user.id)
    vs.sample_url = urls[0]
    job = start_training_job(db, user.id, "voice", urls)
    db.commit()
    db.refresh(job)
    return job_out(job)
