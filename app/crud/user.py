from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.rbac import ROLE_STUDENT
from app.core.security_password import hash_password
from app.crud.base import CRUDBase, store_call
from app.models.role import Role
from app.models.user import User
from app.schemas.user import UserCreate


class CRUDUser(CRUDBase[User, UserCreate, UserCreate]):
    def create(self, db: Session, obj_in: UserCreate, extra=None, role_name: str = ROLE_STUDENT) -> User:
        data = obj_in.model_dump()
        data["email"] = data["email"].strip().lower()
        data["hashed_password"] = hash_password(data.pop("password"))
        if extra: data.update(extra)
        user = User(**data)
        with store_call(db, "insert:users"):
            role = db.execute(select(Role).where(Role.name == role_name)).scalar_one_or_none()
            if role is None:
                role = Role(name=role_name)
                db.add(role)
            user.roles.append(role)
            db.add(user); db.commit(); db.refresh(user)
        return user

    def get_by_email(self, db: Session, email: str) -> User | None:
        with store_call(db, "get:users"):
            return db.execute(select(User).where(User.email == email.strip().lower())).scalar_one_or_none()

    def count_with_role(self, db: Session, role_name: str) -> int:
        with store_call(db, "count:users"):
            return db.scalar(
                select(func.count(User.id)).select_from(User).join(User.roles).where(Role.name == role_name)
            ) or 0

user_crud = CRUDUser(User)
