from sqlalchemy import Column, String, DateTime, func
from sqlalchemy.orm import relationship

from app.db.base import Base, new_id, utcnow
from app.models.user_role import user_roles  # garante que a tabela exista


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)

    name = Column(String(120), nullable=False)
    email = Column(String(160), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    roles = relationship("Role", secondary=user_roles, back_populates="users", lazy="selectin")
    profile = relationship("UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")
