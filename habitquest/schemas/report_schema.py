# habitquest/schemas/report_schema.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class GoalSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Optional[str] = None
    title: Optional[str] = None


class ReportRequest(BaseModel):
    goals: Optional[List[GoalSnapshot]] = None


class ReportResponse(BaseModel):
    message: str
    success: bool = True
