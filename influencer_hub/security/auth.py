from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Any
import jwt
import bcrypt
from fastapi import Request, HTTPException, Depends, Response, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from influencer_hub.db import get_db
from influencer_hub.models import Profile
from influencer_hub.config import settings

ALGORITHM = "HS256"
COOKIE_NAME = "access_token"

def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8')[:72], hashed_password.encode('utf-8'))
    except ValueError:
        return False

def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8')[:72], bcrypt.gensalt()).decode('utf-8')

def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(dt_timezone.utc) + (expires_delta or timedelta(days=settings.access_token_days))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)

def issue_session(response: Response, profile: Profile) -> dict[str, Any]:
    """Create a token for the profile and set it as an HttpOnly cookie."""
    access_token = create_access_token(data={"sub": str(profile.id)})
    response.set_cookie(
        key=COOKIE_NAME,
        value=access_token,
        httponly=True,
        samesite="lax",
        secure=settings.environment != "local",
        max_age=settings.access_token_days * 24 * 60 * 60
    )
    return {"access_token": access_token, "token_type": "bearer"}

def find_profile_by_email(db: Session, email: str) -> Profile | None:
    return db.query(Profile).filter(func.lower(Profile.email) == email.strip().lower()).first()

def ensure_profile_exists(db: Session, user_id: int | None, user_data: dict[str, Any]) -> Profile:
    """
    Return the profile for user_id, creating it from user_data when missing.
    Name falls back to the nested user_metadata name and then to "User".
    """
    if user_id is not None:
        existing = db.get(Profile, user_id)
        if existing:
            return existing

    name = user_data.get("name") or (user_data.get("user_metadata") or {}).get("name") or "User"
    profile = Profile(
        email=(user_data.get("email") or "").strip(),
        name=name,
        password_hash=user_data.get("password_hash"),
    )
    if user_id is not None:
        profile.id = user_id
    db.add(profile)
    db.flush()
    return profile

def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
) -> Profile | None:
    # Cookie first, then Bearer header
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.startswith("Bearer "):
            token = auth_header.split("Bearer ")[1]
    if not token:
        return None

    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
        user_id = payload.get("sub")
        if user_id is None:
            return None
    except jwt.PyJWTError:
        return None

    user = db.get(Profile, int(user_id))
    if not user or not user.is_active:
        return None
    return user

def require_user(user: Profile | None = Depends(get_current_user)) -> Profile:
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
