import logging
import uuid
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from models import Fine, Report, User

logger = logging.getLogger(__name__)


def parse_id(value: str) -> Optional[uuid.UUID]:
    """Returns the UUID for a client-supplied id, or None when it is malformed."""
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def save(db: Session, *objects, action: str = "save record"):
    """Adds and commits the given objects, turning store failures into a generic 500."""
    try:
        for obj in objects:
            db.add(obj)
        db.commit()
        for obj in objects:
            db.refresh(obj)
    except Exception:
        db.rollback()
        logger.exception("Failed to %s", action)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: str) -> Optional[User]:
    parsed = parse_id(user_id)
    if parsed is None:
        return None
    return db.query(User).filter(User.id == parsed).first()


def get_report(db: Session, report_id: str) -> Optional[Report]:
    parsed = parse_id(report_id)
    if parsed is None:
        return None
    return db.query(Report).filter(Report.id == parsed).first()


def get_fine(db: Session, fine_id: str) -> Optional[Fine]:
    parsed = parse_id(fine_id)
    if parsed is None:
        return None
    return db.query(Fine).filter(Fine.id == parsed).first()
