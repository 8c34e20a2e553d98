from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from app.core.rbac import Principal
from app.crud.analytics import analytics_crud
from app.models.analytics import AnalyticsMetric, STUDY_HOURS


def utc_today() -> date:
    # sessões agrupadas pelo dia UTC
    return datetime.now(timezone.utc).date()


def seconds_to_hours(seconds: int) -> float:
    return round(seconds / 3600, 2)


def record_study_session(db: Session, principal: Principal, seconds: int, today: Optional[date] = None) -> AnalyticsMetric:
    return analytics_crud.add_to_metric(
        db,
        user_id=principal.id,
        metric_name=STUDY_HOURS,
        value=seconds_to_hours(seconds),
        day=today or utc_today(),
    )
