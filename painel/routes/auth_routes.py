from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from painel.database import get_db
from painel.dependencies import get_current_principal, get_token_codec
from painel.core.security import TokenCodec
from painel.models.tenant_context import Principal
from painel.services.auth_service import AuthService
from painel.schemas.auth_schemas import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    UserResponse,
)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
):
    """
    Exchange email and password for an access token.

    - Only active users can log in
    - Wrong password and unknown email return the same 401 message
    """
    service = AuthService(db, codec)
    token, user = service.login(credentials.email, credentials.password)
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
def get_me(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
):
    """Get the authenticated user's stored details"""
    service = AuthService(db, codec)
    return service.get_me(principal)


@router.post("/logout", response_model=LogoutResponse)
async def logout(principal: Principal = Depends(get_current_principal)):
    """
    Log out.

    Tokens are not tracked server-side; the client discards its token.
    """
    return LogoutResponse(message="Logged out successfully")
