# app/core/tokens.py
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from app.core.config import settings

ALGO = settings.ALGORITHM

def _now() -> datetime:
    return datetime.now(timezone.utc)

def _encode(token_type: str, sub: str, expires_at: datetime) -> str:
    payload: Dict[str, Any] = {
        "type": token_type,
        "sub": sub,
        "jti": uuid.uuid4().hex,
        "iat": int(_now().timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGO)

def create_access_token(*, sub: str) -> str:
    """Access token curto (minutos); sub = id do usuário."""
    return _encode("access", sub, _now() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

def create_refresh_token(*, sub: str) -> str:
    return _encode("refresh", sub, _now() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))

def _decode(token: str, token_type: str) -> Optional[Dict[str, Any]]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGO])
    except JWTError:
        return None
    if not isinstance(payload, dict):
        return None
    if payload.get("type") != token_type:
        return None
    if not payload.get("sub"):
        return None
    return payload

def decode_access(token: str) -> Optional[Dict[str, Any]]:
    return _decode(token, "access")

def decode_refresh(token: str) -> Optional[Dict[str, Any]]:
    return _decode(token, "refresh")
