from datetime import datetime
from pydantic import BaseModel, Field
from painel.models.role import UserRole


class LoginRequest(BaseModel):
    """Credentials for POST /api/auth/login"""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Logged-in user details"""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    role: UserRole
    tenant_id: int | None
    created_at: datetime
    last_login: datetime | None


class LoginResponse(BaseModel):
    """Access token plus the user it was issued for"""

    token: str
    token_type: str = "bearer"
    user: UserResponse


class LogoutResponse(BaseModel):
    message: str
