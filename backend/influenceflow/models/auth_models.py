from pydantic import BaseModel, Field, field_validator
from typing import Optional


class RegisterRequest(BaseModel):
    """Request model for user registration.

    ``email`` and ``password`` are optional here so that a missing field is
    reported by the auth service as a 400 rather than a schema error.
    """
    name: Optional[str] = Field(None, max_length=100, description="Optional display name")
    email: Optional[str] = Field(None, description="Email address")
    password: Optional[str] = Field(None, description="Plaintext password")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return None
        v = v.strip()
        return v or None


class LoginRequest(BaseModel):
    """Request model for user login"""
    email: Optional[str] = Field(None, description="Email address")
    password: Optional[str] = Field(None, description="Plaintext password")


class UserResponse(BaseModel):
    """Sanitized user returned to clients"""
    id: int
    name: Optional[str] = None
    email: str
    role: str = "user"

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Response model for successful registration or login"""
    token: str
    user: UserResponse


class SessionClaimsResponse(BaseModel):
    """Identity decoded from the caller's bearer token"""
    id: int
    email: str
    role: str
    issued_at: str
    expires_at: str
