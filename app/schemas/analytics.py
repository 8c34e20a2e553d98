from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class StudySessionIn(BaseModel):
    seconds: int = Field(gt=0, le=24 * 3600)


class AnalyticsOut(BaseModel):
    id: str
    metric_name: str
    metric_value: float
    metric_date: date
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
