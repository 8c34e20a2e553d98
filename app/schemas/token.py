# app/schemas/token.py
from pydantic import BaseModel

from app.schemas.user import UserOut

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class AuthResponse(TokenPair):
    user: UserOut
