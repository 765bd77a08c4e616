from pydantic import BaseModel, EmailStr, Field

from bookshop.schemas.types import UTCDateTime

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Login name, unique per user")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, max_length=72, description="Plain password (will be hashed). Minimum 8 characters.")

class UserResponse(BaseModel):
    id: int
    name: str
    email: EmailStr
    created_at: UTCDateTime

    class Config:
        from_attributes = True
