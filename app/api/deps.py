from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError
from app.core.rbac import Principal, principal_for
from app.core.tokens import decode_access
from app.crud.user import user_crud
from app.db.session import get_db
from app.models.user import User

# ----------------------------------------------------------------------
# Lê o Bearer do header Authorization (sem usar OAuth2PasswordBearer)
# ----------------------------------------------------------------------
def _parse_bearer(authorization: str) -> str:
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Invalid Authorization header")
    return parts[1]

def get_bearer_token(authorization: str = Header(None, alias="Authorization")) -> str:
    if not authorization:
        raise AuthenticationError("Missing Authorization header")
    return _parse_bearer(authorization)

def _user_from_token(db: Session, token: str) -> User:
    payload = decode_access(token)
    if not payload:
        raise AuthenticationError("Invalid token")
    user = user_crud.get(db, payload["sub"])
    if not user:
        raise AuthenticationError("User not found")
    if user.status != "active":
        raise AuthenticationError("User is not active")
    return user

def get_current_user(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> User:
    return _user_from_token(db, token)

# ----------------------------------------------------------------------
# Principal resolvido uma vez por requisição e repassado aos services
# ----------------------------------------------------------------------
def get_current_principal(user: User = Depends(get_current_user)) -> Principal:
    return principal_for(user)

def get_optional_principal(
    authorization: str = Header(None, alias="Authorization"),
    db: Session = Depends(get_db),
) -> Optional[Principal]:
    # anônimo é permitido; token presente mas inválido continua sendo 401
    if not authorization:
        return None
    return principal_for(_user_from_token(db, _parse_bearer(authorization)))
