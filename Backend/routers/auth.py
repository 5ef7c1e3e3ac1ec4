from fastapi import APIRouter, Depends, HTTPException, Header, status
from sqlalchemy.orm import Session
from database import get_db
from app_models import User, UserSession, Profile
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import logging
import secrets

import config
from schemas import UserCreate, UserLogin, UserResponse, ProfileResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])

# Using pbkdf2_sha256 to avoid bcrypt's 72 byte limit and potential environment issues
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password)

def token_hash(token):
    return hashlib.sha256(token.encode("utf-8")).hexdigest()

def _utcnow():
    return datetime.now(timezone.utc)

def _as_utc(value):
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def create_session(db: Session, user: User):
    """Returns the raw bearer token, only its hash is stored."""
    raw_token = secrets.token_urlsafe(32)
    session = UserSession(
        user_id=user.id,
        token_hash=token_hash(raw_token),
        expires_at=_utcnow() + timedelta(hours=config.SESSION_TTL_HOURS),
        last_seen_at=_utcnow(),
    )
    db.add(session)
    db.commit()
    return raw_token, session


def _bearer_token(authorization: Optional[str]):
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
):
    """Dependency: resolves `Authorization: Bearer <token>` to a User."""
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    session = db.query(UserSession).filter(UserSession.token_hash == token_hash(token)).first()
    if not session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if _as_utc(session.expires_at) < _utcnow():
        db.delete(session)
        db.commit()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == session.user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid session")

    session.last_seen_at = _utcnow()
    db.commit()
    return user


@router.post("/signup", response_model=UserResponse)
def signup(user: UserCreate, db: Session = Depends(get_db)):
    email = user.email.strip().lower()
    db_user = db.query(User).filter(User.email == email).first()
    if db_user:
        raise HTTPException(status_code=400, detail="Email already registered")

    new_user = User(email=email, hashed_password=get_password_hash(user.password))
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info("New account created for user %s", new_user.id)
    return new_user

@router.post("/login")
def login(user_credentials: UserLogin, db: Session = Depends(get_db)):
    email = user_credentials.email.strip().lower()
    user = db.query(User).filter(User.email == email).first()

    if not user or not verify_password(user_credentials.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    raw_token, session = create_session(db, user)

    return {
        "status": "success",
        "token": raw_token,
        "token_type": "bearer",
        "expires_at": session.expires_at.isoformat(),
        "user": {
            "id": user.id,
            "email": user.email,
        }
    }

@router.post("/logout", response_model=MessageResponse)
def logout(
    authorization: Optional[str] = Header(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    token = _bearer_token(authorization)
    db.query(UserSession).filter(UserSession.token_hash == token_hash(token)).delete(synchronize_session=False)
    db.commit()
    return {"status": "success", "message": "Signed out"}

@router.get("/me")
def me(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    profile = db.query(Profile).filter(Profile.id == user.id).first()
    return {
        "status": "success",
        "user": UserResponse.model_validate(user).model_dump(),
        "profile": ProfileResponse.model_validate(profile).model_dump() if profile else None,
    }
