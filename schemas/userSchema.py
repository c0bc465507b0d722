from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from schemas.base_schema import CamelModel


# --- Schema for User Registration (Input) ---
class UserCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    id: UUID = Field(alias="_id")
    name: str
    email: EmailStr
    phone: str
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Registration returns the id both for new and already-known emails
class UserIdResponse(CamelModel):
    message: str
    user_id: UUID
