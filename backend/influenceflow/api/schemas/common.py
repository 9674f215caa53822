from pydantic import BaseModel
from typing import Optional


class ErrorResponse(BaseModel):
    """Standard error response"""
    success: bool = False
    message: str
    status_code: int
    path: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": False,
                "message": "Email already registered.",
                "status_code": 409,
                "path": "/api/auth/register"
            }
        }
    }


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = "ok"
