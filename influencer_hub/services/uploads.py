# Copyright (c) 2026 Mohammed Hassan. All rights reserved.
# Proprietary and confidential. Unauthorized copying, modification, distribution, or use is prohibited.

import os
import shutil
from datetime import datetime, timezone
from fastapi import HTTPException, UploadFile
from influencer_hub.config import settings
from influencer_hub.logging_setup import log_event

AUDIO_TYPES = ("audio/mpeg", "audio/mp3", "audio/wav", "audio/x-wav", "audio/webm", "audio/ogg", "audio/mp4", "audio/x-m4a")
VIDEO_TYPES = ("video/mp4", "video/quicktime", "video/webm")
IMAGE_TYPES = ("image/png", "image/jpeg", "image/jpg", "image/webp")

def _utcnow():
    return datetime.now(timezone.utc)

def ensure_uploads_dir():
    os.makedirs(settings.uploads_dir, exist_ok=True)

def check_upload_types(uploads: list[UploadFile], allowed_types: tuple[str, ...]):
    """Rejects the whole batch before anything is written."""
    rejected = [u.filename or "upload" for u in uploads if u.content_type not in allowed_types]
    if rejected:
        raise HTTPException(status_code=400, detail=f"Unsupported file type for: {', '.join(rejected)}")

def save_upload(upload: UploadFile, prefix: str, allowed_types: tuple[str, ...]) -> tuple[str, str]:
    """Store an uploaded file under uploads_dir. Returns (public_url, local_path)."""
    if upload.content_type not in allowed_types:
        raise HTTPException(status_code=400, detail=f"File type '{upload.content_type}' is not supported.")

    ensure_uploads_dir()
    safe_name = os.path.basename(upload.filename or "upload")
    filename = f"{prefix}_{int(_utcnow().timestamp() * 1000)}_{safe_name}"
    local_path = os.path.join(settings.uploads_dir, filename)
    try:
        with open(local_path, "wb") as f:
            shutil.copyfileobj(upload.file, f)
    except OSError as e:
        log_event("upload_save_fail", level="error", upload_name=filename, error=str(e))
        raise HTTPException(status_code=500, detail="Could not save uploaded file. Check disk space/permissions.")

    public_url = f"{settings.public_base_url.rstrip('/')}/uploads/{filename}"
    return public_url, local_path
