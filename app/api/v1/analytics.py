# app/api/v1/analytics.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_principal, get_db
from app.core.rbac import Principal
from app.crud.analytics import analytics_crud
from app.schemas.analytics import AnalyticsOut, StudySessionIn
from app.services.analytics import record_study_session

router = APIRouter()

@router.post("/study-sessions", response_model=AnalyticsOut, status_code=status.HTTP_201_CREATED)
def add_study_session(
    body: StudySessionIn,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return record_study_session(db, principal, body.seconds)

@router.get("/", response_model=List[AnalyticsOut])
def list_my_metrics(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return analytics_crud.list_for_user(db, principal.id)
