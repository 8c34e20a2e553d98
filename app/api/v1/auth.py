# app/api/v1/auth.py
from __future__ import annotations
import logging
from urllib.parse import parse_qs

from fastapi import APIRouter, Depends, Body, Query, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.core.exceptions import AuthenticationError, ConflictError, ValidationError
from app.core.rbac import primary_role
from app.core.security_password import check_password_policy, verify_and_maybe_upgrade
from app.core.tokens import create_access_token, create_refresh_token, decode_refresh
from app.crud.base import store_call
from app.crud.user import user_crud
from app.models.user import User
from app.schemas.token import AuthResponse, TokenPair
from app.schemas.user import UserCreate, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()

# ---------- helpers ----------
def normalize_email(email: str) -> str:
    return (email or "").strip().lower()

def user_out(user: User) -> UserOut:
    names = sorted({r.name for r in (user.roles or [])})
    return UserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        status=user.status,
        roles=names,              # <- para o front gatear páginas
        role=primary_role(names), # <- papel principal
    )

def issue_tokens_for(user: User) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(sub=user.id),
        refresh_token=create_refresh_token(sub=user.id),
    )

def _authenticate(db: Session, email: str, password: str) -> User:
    if not email or not password:
        raise ValidationError("Email and password are required.")
    check_password_policy(password)

    user = user_crud.get_by_email(db, email)
    if not user:
        raise AuthenticationError("Invalid credentials.")
    ok, new_hash = verify_and_maybe_upgrade(password, user.hashed_password)
    if not ok:
        logger.info("login failed", extra={"email": email})
        raise AuthenticationError("Invalid credentials.")
    if new_hash:
        user.hashed_password = new_hash
        with store_call(db, "update:users"):
            db.add(user); db.commit()
    return user

async def _extract_credentials_from_request(request: Request) -> tuple[str, str]:
    ct = request.headers.get("content-type", "").lower()
    try:
        if ct.startswith("application/json"):
            data = await request.json()
            if isinstance(data, dict):
                return normalize_email(data.get("username") or data.get("email") or ""), data.get("password") or ""
        raw = (await request.body()).decode()
    except (ValueError, UnicodeDecodeError) as exc:
        raise ValidationError("Malformed credentials body.", details={"content_type": ct}) from exc
    parsed = parse_qs(raw, keep_blank_values=True)
    email = normalize_email((parsed.get("username", [""])[0]) or (parsed.get("email", [""])[0]) or "")
    return email, (parsed.get("password", [""])[0]) or ""

# ---------- endpoints ----------
@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, db: Session = Depends(get_db)):
    if user_crud.get_by_email(db, body.email):
        raise ConflictError("Email already registered.", details={"field": "email"})
    user = user_crud.create(db, body)
    logger.info("user registered", extra={"user_id": user.id})
    return user_out(user)

@router.post("/login", response_model=AuthResponse)
async def login(request: Request, db: Session = Depends(get_db)):
    email, password = await _extract_credentials_from_request(request)
    user = _authenticate(db, email, password)
    return AuthResponse(**issue_tokens_for(user).model_dump(), user=user_out(user))

@router.post("/token", response_model=TokenPair)
def login_oauth2_form(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = _authenticate(db, normalize_email(form.username), form.password or "")
    return issue_tokens_for(user)

@router.post("/refresh", response_model=AuthResponse)
def refresh(
    token: str | None = Body(default=None, embed=True),        # {"token":"<refresh>"}
    token_q: str | None = Query(default=None, alias="token"),  # ?token=<refresh>
    db: Session = Depends(get_db),
):
    tok = token or token_q
    if not tok:
        raise ValidationError("Refresh token is required.", details={"field": "token"})
    payload = decode_refresh(tok)
    if not payload:
        raise AuthenticationError("Invalid token")
    user = user_crud.get(db, payload["sub"])
    if not user:
        raise AuthenticationError("User not found")
    if user.status != "active":
        raise AuthenticationError("User is not active")
    return AuthResponse(**issue_tokens_for(user).model_dump(), user=user_out(user))

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user_out(user)
