from sqlalchemy.orm import Session

from app.crud.base import CRUDBase, coerce, store_call
from app.models.profile import UserProfile
from app.schemas.profile import ProfileUpdate


class CRUDProfile(CRUDBase[UserProfile, ProfileUpdate, ProfileUpdate]):
    def upsert(self, db: Session, user_id: str, obj_in: ProfileUpdate | dict) -> UserProfile:
        payload = coerce(ProfileUpdate, obj_in)
        profile = self.get(db, user_id)
        if profile is None:
            profile = UserProfile(user_id=user_id, skills=[])
        for f, v in payload.model_dump(exclude_unset=True).items():
            setattr(profile, f, v)
        with store_call(db, "upsert:user_profiles"):
            db.add(profile); db.commit(); db.refresh(profile)
        return profile


profile_crud = CRUDProfile(UserProfile)
