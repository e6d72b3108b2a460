# habitquest/routes/reports.py
from fastapi import APIRouter

from ..controllers import report_controller
from ..schemas.report_schema import ReportRequest, ReportResponse

router = APIRouter(prefix="/api", tags=["Reports"])


@router.post("/generate-report", response_model=ReportResponse, summary="Compose the daily text report")
async def generate_report_route(data: ReportRequest):
    return report_controller.generate_report(data)
