import uuid
from datetime import datetime
from sqlalchemy import (
    Column, String, Float, DateTime,
    Enum, ForeignKey, JSON, Uuid
)
from sqlalchemy.orm import relationship
from database import Base

REPORT_PENDING = "Pending Review"
REPORT_APPROVED = "Approved"
REPORT_REJECTED = "Rejected"

FINE_UNPAID = "Unpaid"
FINE_PAID = "Paid"


class User(Base):
    __tablename__ = "users"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=False)
    role = Column(Enum("public", "police", "owner", name="user_roles"), default="public", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    reports = relationship("Report", back_populates="reporter")
    tokens = relationship("AuthToken", back_populates="user")


class Otp(Base):
    __tablename__ = "otps"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Keyed by email, not a foreign key to users
    email = Column(String, index=True, nullable=False)
    code_hash = Column(String, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class AuthToken(Base):
    __tablename__ = "auth_tokens"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    token = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="tokens")


class Report(Base):
    __tablename__ = "reports"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    reporter_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    vehicle_number = Column(String, index=True, nullable=False)
    violation_type = Column(String, nullable=False)
    description = Column(String, nullable=True)
    status = Column(
        Enum(REPORT_PENDING, REPORT_APPROVED, REPORT_REJECTED, name="report_status"),
        default=REPORT_PENDING, nullable=False
    )
    media_files = Column(JSON, default=list, nullable=False)  # relative URLs under /uploads
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    address = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    reporter = relationship("User", back_populates="reports")
    fine = relationship("Fine", back_populates="report", uselist=False)

    @property
    def location(self):
        return {"lat": self.latitude, "lng": self.longitude, "address": self.address}


class Fine(Base):
    __tablename__ = "fines"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    report_id = Column(Uuid, ForeignKey("reports.id"), unique=True, nullable=False)
    vehicle_number = Column(String, index=True, nullable=False)
    amount = Column(Float, nullable=False)
    status = Column(Enum(FINE_UNPAID, FINE_PAID, name="fine_status"), default=FINE_UNPAID, nullable=False)
    payment_method = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    report = relationship("Report", back_populates="fine")
