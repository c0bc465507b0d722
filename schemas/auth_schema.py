# schemas/auth_schema.py
from pydantic import EmailStr, Field

from schemas.base_schema import CamelModel


# EmailStr here too, so lookups match the address normalised at registration
class OtpRequest(CamelModel):
    email: EmailStr


class OtpVerify(CamelModel):
    email: EmailStr
    code: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    message: str
    token: str
