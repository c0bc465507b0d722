from pydantic import Field
from uuid import UUID
from datetime import datetime
from typing import Optional

from schemas.base_schema import CamelModel
from schemas.reportSchema import ReportRead


class FineRead(CamelModel):
    id: UUID = Field(alias="_id")
    report_id: UUID
    vehicle_number: str
    amount: float
    status: str  # Unpaid, Paid
    payment_method: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class FineWithReport(FineRead):
    report: Optional[ReportRead] = None


class FinePayment(CamelModel):
    payment_method: Optional[str] = None  # e.g. UPI, NetBanking, Card


class FinePaymentResponse(CamelModel):
    message: str
    fine: FineRead
