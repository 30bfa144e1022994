from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ..db import get_db
from ..models import SocialConnection, Profile
from ..schemas import PlatformStatusOut, SocialConnectionIn
from ..security.auth import require_user
from ..logging_setup import log_event

router = APIRouter(prefix="/social-connections", tags=["social-connections"])

# id -> display name, in the order the dashboard shows them
PLATFORMS = {
    "instagram": "Instagram",
    "linkedin": "LinkedIn",
    "facebook": "Facebook",
    "twitter": "Twitter",
    "youtube": "YouTube",
    "tiktok": "TikTok",
    "whatsapp": "WhatsApp",
}

def _platform_or_400(platform: str) -> str:
    platform = platform.lower()
    if platform not in PLATFORMS:
        raise HTTPException(status_code=400, detail=f"Unsupported platform '{platform}'")
    return platform

def _status(platform: str, conn: SocialConnection | None) -> dict:
    return {
        "id": platform,
        "name": PLATFORMS[platform],
        "connected": conn is not None,
        "username": conn.username if conn else None,
        "token_expires_at": conn.token_expires_at if conn else None,
    }

@router.get("", response_model=list[PlatformStatusOut])
def list_platforms(
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    """Every supported platform with the user's connection state."""
    rows = db.query(SocialConnection).filter(SocialConnection.user_id == user.id).all()
    by_platform = {r.platform: r for r in rows}
    return [_status(p, by_platform.get(p)) for p in PLATFORMS]

@router.put("/{platform}", response_model=PlatformStatusOut)
def connect_platform(
    platform: str,
    payload: SocialConnectionIn,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    platform = _platform_or_400(platform)
    username = payload.username.strip().lstrip("@")
    if not username:
        raise HTTPException(status_code=400, detail="Please enter the account username.")

    conn = db.query(SocialConnection).filter(
        SocialConnection.user_id == user.id,
        SocialConnection.platform == platform
    ).first()
    if not conn:
        conn = SocialConnection(user_id=user.id, platform=platform)
        db.add(conn)

    conn.username = username
    conn.access_token = payload.access_token
    conn.refresh_token = payload.refresh_token
    conn.token_expires_at = payload.token_expires_at
    db.commit()
    db.refresh(conn)

    log_event("social_connect", user_id=user.id, platform=platform)
    return _status(platform, conn)

@router.delete("/{platform}", response_model=PlatformStatusOut)
def disconnect_platform(
    platform: str,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_user),
):
    platform = _platform_or_400(platform)
    conn = db.query(SocialConnection).filter(
        SocialConnection.user_id == user.id,
        SocialConnection.platform == platform
    ).first()
    if not conn:
        raise HTTPException(status_code=404, detail=f"{PLATFORMS[platform]} is not connected")

    db.delete(conn)
    db.commit()

    log_event("social_disconnect", user_id=user.id, platform=platform)
    return _status(platform, None)
