# habitquest/controllers/report_controller.py
import logging

from ..exceptions import ValidationException
from ..schemas.report_schema import ReportRequest, ReportResponse
from ..schemas.share_schema import ShareRequest, ShareResponse
from ..services.report_composer import compose_report
from ..services.share_renderer import render_share_data_url

logger = logging.getLogger(__name__)


def generate_report(data: ReportRequest) -> ReportResponse:
    if not data.goals:
        raise ValidationException("goals", "goals must be a non-empty array")
    return ReportResponse(message=compose_report(data.goals), success=True)


def share_achievement(data: ShareRequest) -> ShareResponse:
    title = (data.title or "").strip()
    description = (data.description or "").strip()
    if not title or not description:
        raise ValidationException("title", "title and description are required")

    url = render_share_data_url(title, description, data.points)
    logger.info("Rendered share card for '%s' (%d bytes)", title, len(url))
    return ShareResponse(success=True, url=url)
