import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from crud import get_report, save
from database import get_db
from models import Fine, Report, REPORT_APPROVED, REPORT_PENDING, REPORT_REJECTED
from schemas.base_schema import MessageResponse
from schemas.reportSchema import ReportDecision, ReportRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/police", tags=["police"])


@router.get("/reports/pending", response_model=List[ReportRead])
def list_pending_reports(db: Session = Depends(get_db)):
    return (
        db.query(Report)
          .filter(Report.status == REPORT_PENDING)
          .order_by(Report.created_at.desc())
          .all()
    )


@router.post("/reports/{report_id}/decision", response_model=MessageResponse)
def decide_report(report_id: str, decision: ReportDecision, db: Session = Depends(get_db)):
    """
    Approves or rejects a pending report. Approval with a positive fine amount
    also issues a fine; the status change and the fine are separate writes.
    """
    report = get_report(db, report_id)
    if not report:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found")

    if decision.decision not in ("Approve", "Reject"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid decision")

    # Decisions are final
    if report.status != REPORT_PENDING:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Report has already been reviewed ({report.status})",
        )

    if decision.decision == "Reject":
        report.status = REPORT_REJECTED
        save(db, report, action="reject report")
        logger.info("Report %s rejected", report.id)
        return MessageResponse(message="Report rejected.")

    report.status = REPORT_APPROVED
    save(db, report, action="approve report")

    if decision.fine_amount:
        fine = Fine(report_id=report.id, vehicle_number=report.vehicle_number, amount=decision.fine_amount)
        save(db, fine, action="create fine")
        logger.info("Report %s approved with fine %s of %.2f", report.id, fine.id, fine.amount)
    else:
        logger.info("Report %s approved without fine", report.id)

    # TODO: notify the vehicle owner by email/SMS once contact details are linked to vehicles
    return MessageResponse(message="Report approved and fine (if any) created.")
