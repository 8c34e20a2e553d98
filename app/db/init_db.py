# app/db/init_db.py
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.rbac import ROLE_ADMIN, ROLE_STUDENT
from app.core.security_password import hash_password
from app.models.role import Role
from app.models.user import User

logger = logging.getLogger(__name__)

ROLE_NAMES = [ROLE_STUDENT, ROLE_ADMIN]

def ensure_roles(db: Session) -> dict[str, Role]:
    roles = {r.name: r for r in db.scalars(select(Role)).all()}
    for name in ROLE_NAMES:
        if name not in roles:
            r = Role(name=name)
            db.add(r); db.flush()
            roles[name] = r
    return roles

def init_db(db: Session) -> None:
    roles = ensure_roles(db)

    email = settings.FIRST_ADMIN_EMAIL.strip().lower()
    admin = db.scalar(select(User).where(User.email == email))
    if not admin:
        admin = User(
            name=settings.FIRST_ADMIN_NAME,
            email=email,
            hashed_password=hash_password(settings.FIRST_ADMIN_PASSWORD),
            status="active",
        )
        db.add(admin); db.flush()
        admin.roles.append(roles[ROLE_ADMIN])
        logger.info("seeded first admin account", extra={"email": email})

    db.commit()
