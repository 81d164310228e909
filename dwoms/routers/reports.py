from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from typing import Any, Dict, Optional, Tuple
from datetime import date
import logging

from ..auth.dependencies import require_capability
from ..auth.permissions import Capability
from ..models.user import User
from ..services.reporting_service import ReportType, reporting_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _resolve_range(start_date: Optional[date], end_date: Optional[date]) -> Tuple[date, date]:
    default_start, default_end = reporting_service.default_range()
    start = start_date or default_start
    end = end_date or default_end
    if start > end:
        raise HTTPException(status_code=400, detail="start_date must be on or before end_date")
    return start, end


@router.get("/summary", response_model=Dict[str, Any])
async def get_report_summary(
    start_date: Optional[date] = Query(None, description="Start date (YYYY-MM-DD), default 30 days ago"),
    end_date: Optional[date] = Query(None, description="End date (YYYY-MM-DD), default today"),
    current_user: User = Depends(require_capability(Capability.VIEW_REPORTS))
):
    """Headline numbers for the selected period"""
    start, end = _resolve_range(start_date, end_date)
    try:
        summary = await reporting_service.get_summary(start, end)
        return {"success": True, "data": summary}
    except Exception as e:
        logger.error(f"Error building report summary: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{report_type}/csv")
async def export_report_csv(
    report_type: ReportType,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    current_user: User = Depends(require_capability(Capability.VIEW_REPORTS))
):
    """
    Download a report as CSV.

    Production and task reports honour the date range; the inventory report
    is a snapshot of current stock.
    """
    start, end = _resolve_range(start_date, end_date)
    try:
        filename, content = await reporting_service.generate_csv(report_type, start, end)
        return StreamingResponse(
            iter([content]),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"}
        )
    except Exception as e:
        logger.error(f"Error exporting {report_type.value} CSV: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to export CSV: {str(e)}")


@router.get("/{report_type}/document")
async def export_report_document(
    report_type: ReportType,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    current_user: User = Depends(require_capability(Capability.VIEW_REPORTS))
):
    """Download the paginated report as a workbook, one sheet per page"""
    start, end = _resolve_range(start_date, end_date)
    try:
        document = await reporting_service.generate_document(report_type, start, end)
        data = reporting_service.render_workbook(document)
        logger.info(f"[Reports] Rendered {document.filename} ({len(document.pages)} pages)")
        return StreamingResponse(
            iter([data]),
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f"attachment; filename={document.filename}"}
        )
    except Exception as e:
        logger.error(f"Error exporting {report_type.value} document: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to export document: {str(e)}")
