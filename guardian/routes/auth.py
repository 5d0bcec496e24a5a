from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from guardian import config
from guardian.db import get_db
from guardian.errors import AuthenticationError, ValidationError
from guardian.models import User, UserSettings, new_id
from guardian.schemas import Token, UserCreate
from guardian.services.auth_service import (
    create_token,
    get_current_user_id,
    hash_password,
    verify_password,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _session_payload(user: User):
    return {
        "token": create_token(user.id, user.email),
        "user": {"id": user.id, "email": user.email},
    }


@router.post("/signup", response_model=Token)
def signup(body: UserCreate, db: Session = Depends(get_db)):
    if not body.email or not body.password:
        raise ValidationError("Email and password are required")
    if len(body.password) < config.MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {config.MIN_PASSWORD_LENGTH} characters")

    if db.query(User).filter(User.email == body.email).first():
        raise ValidationError("This email is already registered")

    user = User(id=new_id(), email=body.email, password_hash=hash_password(body.password))
    db.add(user)
    db.add(UserSettings(id=new_id(), user_id=user.id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("This email is already registered")
    return _session_payload(user)


@router.post("/signin", response_model=Token)
def signin(body: UserCreate, db: Session = Depends(get_db)):
    if not body.email or not body.password:
        raise ValidationError("Email and password are required")

    user = db.query(User).filter(User.email == body.email).first()
    if not user or not verify_password(body.password, user.password_hash):
        raise AuthenticationError("Invalid email or password")
    return _session_payload(user)


@router.get("/me")
def me(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"user": {"id": user.id, "email": user.email, "created_at": user.created_at}}
