from datetime import datetime

from pydantic import EmailStr, Field

from .common import CamelModel

class UserRequest(CamelModel):
    email: EmailStr
    external_uid: str = Field(..., min_length=1)

class UserResponse(CamelModel):
    id: str
    email: str
    external_uid: str
    created_at: datetime
    updated_at: datetime
