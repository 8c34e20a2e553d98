from datetime import date
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase, store_call
from app.models.analytics import AnalyticsMetric, STUDY_HOURS


class CRUDAnalytics(CRUDBase[AnalyticsMetric, AnalyticsMetric, AnalyticsMetric]):
    def add_to_metric(self, db: Session, *, user_id: str, metric_name: str, value: float, day: date) -> AnalyticsMetric:
        """Soma no registro do dia (cria se não existir)."""
        with store_call(db, "upsert:analytics"):
            row = db.execute(
                select(AnalyticsMetric).where(
                    AnalyticsMetric.user_id == user_id,
                    AnalyticsMetric.metric_name == metric_name,
                    AnalyticsMetric.metric_date == day,
                )
            ).scalar_one_or_none()
            if row is None:
                row = AnalyticsMetric(user_id=user_id, metric_name=metric_name, metric_value=value, metric_date=day)
            else:
                row.metric_value = round(float(row.metric_value or 0) + value, 2)
            db.add(row); db.commit(); db.refresh(row)
        return row

    def list_for_user(self, db: Session, user_id: str) -> List[AnalyticsMetric]:
        with store_call(db, "list:analytics"):
            return list(db.scalars(
                select(AnalyticsMetric)
                .where(AnalyticsMetric.user_id == user_id)
                .order_by(AnalyticsMetric.metric_date.desc())
            ).all())

    def total(self, db: Session, user_id: str, metric_name: str = STUDY_HOURS) -> float:
        with store_call(db, "sum:analytics"):
            value = db.scalar(
                select(func.coalesce(func.sum(AnalyticsMetric.metric_value), 0.0)).where(
                    AnalyticsMetric.user_id == user_id,
                    AnalyticsMetric.metric_name == metric_name,
                )
            )
        return round(float(value or 0), 2)


analytics_crud = CRUDAnalytics(AnalyticsMetric)
