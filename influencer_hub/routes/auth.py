from fastapi import APIRouter, Depends, HTTPException, status, Response
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from typing import Any
from influencer_hub.db import get_db
from influencer_hub.config import settings
from influencer_hub.models import Profile
from influencer_hub.schemas import UserCreate, ProfileOut, ProfileUpdate, ResendConfirmationIn, TokenOut
from influencer_hub.security.auth import (
    verify_password, get_password_hash, issue_session, require_user,
    ensure_profile_exists, find_profile_by_email, COOKIE_NAME,
)
from influencer_hub.logging_setup import log_event

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=TokenOut)
def login(
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
) -> dict[str, Any]:
    user = find_profile_by_email(db, form_data.username)
    if not user or not user.is_active or not verify_password(form_data.password, user.password_hash):
        log_event("auth_login_fail", level="warning")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    log_event("auth_login", user_id=user.id)
    return issue_session(response, user)

@router.post("/signup", response_model=TokenOut)
def signup(
    user_in: UserCreate,
    response: Response,
    db: Session = Depends(get_db)
) -> dict[str, Any]:
    if find_profile_by_email(db, user_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user with this email already exists."
        )

    profile = ensure_profile_exists(db, None, {
        "name": user_in.name,
        "email": user_in.email,
        "password_hash": get_password_hash(user_in.password),
    })
    db.commit()
    db.refresh(profile)

    log_event("auth_signup", user_id=profile.id)
    return issue_session(response, profile)

@router.post("/demo", response_model=TokenOut)
def demo_login(response: Response, db: Session = Depends(get_db)) -> dict[str, Any]:
    """Signs in as a shared demo profile. Disabled unless DEMO_AUTO_LOGIN is set."""
    if not settings.demo_auto_login:
        raise HTTPException(status_code=404, detail="Not Found")

    profile = find_profile_by_email(db, settings.demo_email)
    if not profile:
        profile = ensure_profile_exists(db, None, {"name": "Demo User", "email": settings.demo_email})
        db.commit()
        db.refresh(profile)

    log_event("auth_demo_login", user_id=profile.id)
    return issue_session(response, profile)

@router.post("/logout")
def logout(response: Response) -> dict[str, str]:
    response.delete_cookie(key=COOKIE_NAME, httponly=True, samesite="lax")
    return {"message": "You have been successfully logged out."}

@router.get("/me", response_model=ProfileOut)
def get_me(current_user: Profile = Depends(require_user)):
    return current_user

@router.patch("/me", response_model=ProfileOut)
def update_me(
    payload: ProfileUpdate,
    current_user: Profile = Depends(require_user),
    db: Session = Depends(get_db)
):
    data = payload.model_dump(exclude_unset=True)
    if not data:
        raise HTTPException(status_code=400, detail="No profile fields to update.")

    for k, v in data.items():
        setattr(current_user, k, v)
    db.commit()
    db.refresh(current_user)
    log_event("profile_update", user_id=current_user.id, fields=sorted(data))
    return current_user

@router.post("/resend-confirmation", status_code=status.HTTP_202_ACCEPTED)
def resend_confirmation(payload: ResendConfirmationIn, db: Session = Depends(get_db)) -> dict[str, str]:
    """Always answers the same way so the endpoint can't reveal which emails have accounts."""
    profile = find_profile_by_email(db, payload.email)
    log_event("auth_resend_confirmation", found=profile is not None, confirmed=bool(profile and profile.email_confirmed))
    return {"message": "Please check your inbox for the verification email."}
