# habitquest/schemas/points_schema.py
from typing import Any

from ._common import CamelModel


class PointsIncrementRequest(CamelModel):
    # validated by the ledger itself so 1.5 / "5" / true all fail the same way
    amount: Any = 1


class PointsUserSummary(CamelModel):
    id: str
    telegram_id: str
    pts: int


class PointsIncrementResponse(CamelModel):
    success: bool = True
    user: PointsUserSummary
