from pydantic import Field
from uuid import UUID
from datetime import datetime
from typing import List, Optional

from schemas.base_schema import CamelModel


class LocationRead(CamelModel):
    lat: Optional[float] = None
    lng: Optional[float] = None
    address: Optional[str] = None


class ReportRead(CamelModel):
    id: UUID = Field(alias="_id")
    reporter_id: UUID
    vehicle_number: str
    violation_type: str
    description: Optional[str] = None
    status: str  # Pending Review, Approved, Rejected
    media_files: List[str] = []
    location: LocationRead
    created_at: datetime
    updated_at: datetime


class ReportCreatedResponse(CamelModel):
    message: str
    report_id: UUID


class ReportDecision(CamelModel):
    decision: str  # Approve | Reject
    fine_amount: Optional[float] = Field(None, ge=0)
