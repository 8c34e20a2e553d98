import logging
from contextlib import contextmanager
from typing import TypeVar, Generic, Type, Any, Optional, List, Dict, Iterator, Sequence

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthorizationError, NotFoundError, TransportError, ValidationError
from app.core.rbac import Principal
from app.db.base import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
CreateSchema = TypeVar("CreateSchema", bound=BaseModel)
UpdateSchema = TypeVar("UpdateSchema", bound=BaseModel)


@contextmanager
def store_call(db: Session, operation: str) -> Iterator[None]:
    """Falha de banco vira TransportError (IntegrityError segue para o handler 409)."""
    try:
        yield
    except IntegrityError:
        db.rollback()
        raise
    except DBAPIError as exc:
        db.rollback()
        logger.error("record store call failed", extra={"operation": operation, "error": str(exc.orig)})
        raise TransportError(details={"operation": operation}) from exc


def coerce(schema: Type[BaseModel], obj_in: BaseModel | Dict[str, Any]) -> BaseModel:
    if isinstance(obj_in, schema):
        return obj_in
    try:
        return schema.model_validate(obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True))
    except PydanticValidationError as exc:
        raise ValidationError(
            "Invalid data",
            details={"errors": [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()]},
        ) from exc


class CRUDBase(Generic[ModelType, CreateSchema, UpdateSchema]):
    def __init__(self, model: Type[ModelType]): self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        with store_call(db, f"get:{self.model.__tablename__}"):
            return db.get(self.model, id)

    def create(self, db: Session, obj_in: CreateSchema, extra: Dict[str, Any] | None=None) -> ModelType:
        data = obj_in.model_dump()
        if extra: data.update(extra)
        obj = self.model(**data)
        with store_call(db, f"insert:{self.model.__tablename__}"):
            db.add(obj); db.commit(); db.refresh(obj)
        return obj

    def update(self, db: Session, db_obj: ModelType, obj_in: UpdateSchema | Dict[str, Any]) -> ModelType:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        for f,v in data.items(): setattr(db_obj, f, v)
        with store_call(db, f"update:{self.model.__tablename__}"):
            db.add(db_obj); db.commit(); db.refresh(db_obj)
        return db_obj


class OwnedRecordStore(CRUDBase[ModelType, CreateSchema, UpdateSchema]):
    """
    Store de registros com dono (certificados e projetos).

    Regras de linha aplicadas aqui: só o dono cria, edita conteúdo e apaga;
    campos de verificação só mudam por ``apply_verification``.
    """

    label: str = "Record"
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    verification_fields = frozenset({"is_verified", "verified_by", "verified_at"})

    def ordering(self) -> Sequence[Any]:
        return (self.model.created_at.desc(),)

    def get_or_404(self, db: Session, record_id: str) -> ModelType:
        obj = self.get(db, record_id)
        if obj is None:
            raise NotFoundError(self.label, record_id)
        return obj

    def create_for(self, db: Session, owner: Principal, obj_in: CreateSchema | Dict[str, Any]) -> ModelType:
        payload = coerce(self.create_schema, obj_in)
        obj = self.create(db, payload, extra={"user_id": owner.id})
        logger.info("record created", extra={"kind": self.label, "record_id": obj.id, "owner_id": owner.id})
        return obj

    def list_by_owner(self, db: Session, owner_id: str, verified_only: bool = False) -> List[ModelType]:
        stmt = select(self.model).where(self.model.user_id == owner_id)
        if verified_only:
            stmt = stmt.where(self.model.is_verified.is_(True))
        with store_call(db, f"list:{self.model.__tablename__}"):
            return list(db.scalars(stmt.order_by(*self.ordering())).all())

    def list_all(self, db: Session, verified: Optional[bool] = None, skip: int = 0, limit: int = 100) -> List[ModelType]:
        stmt = select(self.model)
        if verified is not None:
            stmt = stmt.where(self.model.is_verified.is_(verified))
        with store_call(db, f"list:{self.model.__tablename__}"):
            return list(db.scalars(stmt.order_by(self.model.created_at.desc()).offset(skip).limit(limit)).all())

    def _owned(self, db: Session, principal: Principal, record_id: str, action: str) -> ModelType:
        obj = self.get_or_404(db, record_id)
        if obj.user_id != principal.id:
            logger.warning(
                "content change denied",
                extra={"kind": self.label, "record_id": record_id, "actor_id": principal.id, "action": action},
            )
            raise AuthorizationError(f"Only the owner can {action} this {self.label.lower()}")
        return obj

    def update_content(self, db: Session, principal: Principal, record_id: str,
                       obj_in: UpdateSchema | Dict[str, Any]) -> ModelType:
        payload = coerce(self.update_schema, obj_in)
        obj = self._owned(db, principal, record_id, "edit")
        data = payload.model_dump(exclude_unset=True)
        # conteúdo não mexe em verificação (nem reseta)
        data = {k: v for k, v in data.items() if k not in self.verification_fields}
        return self.update(db, obj, data)

    def delete_for(self, db: Session, principal: Principal, record_id: str) -> None:
        obj = self._owned(db, principal, record_id, "delete")
        with store_call(db, f"delete:{self.model.__tablename__}"):
            db.delete(obj); db.commit()
        logger.info("record deleted", extra={"kind": self.label, "record_id": record_id, "owner_id": principal.id})

    def apply_verification(self, db: Session, obj: ModelType, fields: Dict[str, Any], audit=None) -> ModelType:
        """Aplica o conjunto de campos de uma vez (um commit por transição)."""
        for f, v in fields.items():
            setattr(obj, f, v)
        with store_call(db, f"update:{self.model.__tablename__}"):
            db.add(obj)
            if audit is not None:
                db.add(audit)
            db.commit(); db.refresh(obj)
        return obj
