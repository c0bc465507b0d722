import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from fastapi import APIRouter, Depends, Header, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from config import OTP_EXPIRY_MINUTES, OTP_LENGTH, TOKEN_EXPIRY_HOURS
from crud import get_user_by_email, save
from database import get_db
from models import AuthToken, Otp, User
from notifications import send_otp_email
from ratelimit import otp_limiter
from schemas.auth_schema import OtpRequest, OtpVerify, TokenResponse
from schemas.base_schema import MessageResponse
from schemas.userSchema import UserCreate, UserIdResponse, UserResponse

logger = logging.getLogger(__name__)


# --- Utility Functions ---
def generate_otp(length: int = OTP_LENGTH) -> str:
    """Generates a random numerical one-time code."""
    digits = string.digits
    return ''.join(secrets.choice(digits) for _ in range(length))


def hash_code(code: str) -> str:
    """Hashes a one-time code using bcrypt."""
    return bcrypt.hashpw(code.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_code(plain_code: str, code_hash: str) -> bool:
    return bcrypt.checkpw(plain_code.encode('utf-8'), code_hash.encode('utf-8'))


def get_current_user(authorization: Optional[str] = Header(None), db: Session = Depends(get_db)) -> User:
    """Resolves the bearer token issued by /verify-otp to its user."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    record = db.query(AuthToken).filter(AuthToken.token == token).first()
    if not record or record.expires_at < datetime.utcnow():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return record.user


# --- FastAPI Router ---
auth_router = APIRouter(prefix="/auth", tags=["Auth"])


@auth_router.post("/register", response_model=UserIdResponse, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    """
    Public registration. Registering an email that is already known returns the
    existing user's id (200) so a reporter can carry on without a second account.
    """
    existing = get_user_by_email(db, user_in.email)
    if existing:
        body = UserIdResponse(message="User already exists", user_id=existing.id)
        return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump(mode="json", by_alias=True))

    user = User(name=user_in.name, email=user_in.email, phone=user_in.phone, role="public")
    save(db, user, action="register user")
    logger.info("Registered user %s", user.id)

    return UserIdResponse(message="Registered successfully", user_id=user.id)


@auth_router.post("/request-otp", response_model=MessageResponse, dependencies=[Depends(otp_limiter)])
def request_otp(request: OtpRequest, db: Session = Depends(get_db)):
    """Issues a fresh login code for a registered email, replacing any earlier ones."""
    user = get_user_by_email(db, request.email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found. Please register first.")

    code = generate_otp()
    expires_at = datetime.utcnow() + timedelta(minutes=OTP_EXPIRY_MINUTES)

    db.query(Otp).filter(Otp.email == request.email).delete(synchronize_session=False)
    save(db, Otp(email=request.email, code_hash=hash_code(code), expires_at=expires_at), action="issue OTP")

    send_otp_email(request.email, code)
    return MessageResponse(message="OTP generated and (simulated) email sent.")


@auth_router.post("/verify-otp", response_model=TokenResponse)
def verify_otp(request: OtpVerify, db: Session = Depends(get_db)):
    """
    Checks a login code. An expired code is always refused, even when correct.
    On success every code for the email is discarded and a session token is issued.
    """
    candidates = db.query(Otp).filter(Otp.email == request.email).all()
    record = next((otp for otp in candidates if verify_code(request.code, otp.code_hash)), None)

    if not record:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid OTP")
    if record.expires_at < datetime.utcnow():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="OTP expired")

    user = get_user_by_email(db, request.email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found. Please register first.")

    db.query(Otp).filter(Otp.email == request.email).delete(synchronize_session=False)
    token = AuthToken(
        token=secrets.token_hex(16),
        user_id=user.id,
        expires_at=datetime.utcnow() + timedelta(hours=TOKEN_EXPIRY_HOURS),
    )
    save(db, token, action="issue session token")
    logger.info("OTP verified for user %s", user.id)

    return TokenResponse(message="OTP verified", token=token.token)


@auth_router.get("/me", response_model=UserResponse)
def read_current_user(user: User = Depends(get_current_user)):
    return user
