import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, joinedload

from crud import get_fine, save
from database import get_db
from models import Fine, FINE_PAID
from schemas.fineSchema import FinePayment, FinePaymentResponse, FineRead, FineWithReport

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/owner", tags=["owner"])

DEFAULT_PAYMENT_METHOD = "UPI"


@router.get("/fines", response_model=List[FineWithReport])
def list_fines(vehicle_number: str = Query(..., alias="vehicleNumber", min_length=1), db: Session = Depends(get_db)):
    """Fines for one vehicle, each with the report that led to it."""
    return (
        db.query(Fine)
          .options(joinedload(Fine.report))
          .filter(Fine.vehicle_number == vehicle_number)
          .order_by(Fine.created_at.desc())
          .all()
    )


# Simulated payment, there is no gateway behind this
@router.post("/fines/{fine_id}/pay", response_model=FinePaymentResponse)
def pay_fine(fine_id: str, payment: Optional[FinePayment] = None, db: Session = Depends(get_db)):
    fine = get_fine(db, fine_id)
    if not fine:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fine not found")

    if fine.status == FINE_PAID:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Fine has already been paid")

    fine.status = FINE_PAID
    fine.payment_method = (payment.payment_method if payment else None) or DEFAULT_PAYMENT_METHOD
    save(db, fine, action="record fine payment")
    logger.info("Fine %s paid via %s", fine.id, fine.payment_method)

    return FinePaymentResponse(message="Payment simulated successfully", fine=FineRead.model_validate(fine))
