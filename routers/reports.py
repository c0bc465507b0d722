import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from config import MAX_MEDIA_FILES
from crud import get_report, get_user, save
from database import get_db
from models import Report
from ratelimit import report_limiter
from schemas.reportSchema import ReportCreatedResponse, ReportRead
from uploads import discard_media_files, save_media_files

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


def parse_coordinate(value: Optional[str], field: str) -> Optional[float]:
    """Blank form values mean 'not given'; anything else must be numeric."""
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field} must be a number")


@router.post(
    "",
    response_model=ReportCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(report_limiter)],
)
def submit_report(
    reporter_id: str = Form(..., alias="reporterId", min_length=1),
    vehicle_number: str = Form(..., alias="vehicleNumber", min_length=1),
    violation_type: str = Form(..., alias="violationType", min_length=1),
    description: Optional[str] = Form(None),
    lat: Optional[str] = Form(None),
    lng: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    media_files: Optional[List[UploadFile]] = File(None, alias="mediaFiles"),
    db: Session = Depends(get_db),
):
    """Submits a violation report with up to MAX_MEDIA_FILES pieces of evidence."""
    files = [f for f in (media_files or []) if f.filename]
    if len(files) > MAX_MEDIA_FILES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At most {MAX_MEDIA_FILES} media files are allowed per report.",
        )

    latitude = parse_coordinate(lat, "lat")
    longitude = parse_coordinate(lng, "lng")

    reporter = get_user(db, reporter_id)
    if not reporter:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reporter not found")

    media_paths = save_media_files(files)
    report = Report(
        reporter_id=reporter.id,
        vehicle_number=vehicle_number,
        violation_type=violation_type,
        description=description,
        media_files=media_paths,
        latitude=latitude,
        longitude=longitude,
        address=address,
    )
    try:
        save(db, report, action="submit report")
    except Exception:
        # No report will point at these files
        discard_media_files(media_paths)
        raise
    logger.info("Report %s submitted for vehicle %s with %d file(s)", report.id, vehicle_number, len(files))

    return ReportCreatedResponse(message="Report submitted", report_id=report.id)


@router.get("/search", response_model=List[ReportRead])
def search_reports(
    report_id: Optional[str] = Query(None, alias="reportId"),
    vehicle_number: Optional[str] = Query(None, alias="vehicleNumber"),
    db: Session = Depends(get_db),
):
    """Exact lookup by report id or, failing that, by vehicle number."""
    if report_id:
        report = get_report(db, report_id)
        return [report] if report else []
    if vehicle_number:
        return db.query(Report).filter(Report.vehicle_number == vehicle_number).all()
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Provide reportId or vehicleNumber")
