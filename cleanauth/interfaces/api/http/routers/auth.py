"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/auth.py
===============================================================================

Class/Module:
    Auth Router

Responsibilities:
    - POST /auth/login: credenciales -> tokens.
    - POST /auth/refresh: rotación de refresh token.
    - POST /auth/logout: invalida el refresh token del usuario autenticado.
    - Traducir AuthError -> HTTP (error_mapping).

Collaborators:
    - application.usecases (Login/RefreshToken/Logout)
    - cleanauth.container (factories DI)
    - schemas.auth (DTOs)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from .....application.usecases import (
    LoginInput,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenInput,
    RefreshTokenUseCase,
)
from .....container import (
    get_login_use_case,
    get_logout_use_case,
    get_refresh_token_use_case,
)
from .....domain.entities import AccessTokenClaims
from ..dependencies import current_claims
from ..error_mapping import raise_auth_error
from ..schemas.auth import AuthTokenRes, LoginReq, RefreshTokenReq

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthTokenRes)
async def login(
    req: LoginReq,
    use_case: LoginUseCase = Depends(get_login_use_case),
) -> AuthTokenRes:
    result = await use_case.execute(LoginInput(email=req.email, password=req.password))
    if result.error is not None:
        raise_auth_error(result.error)
    return AuthTokenRes.from_tokens(result.tokens)


@router.post("/refresh", response_model=AuthTokenRes)
async def refresh(
    req: RefreshTokenReq,
    use_case: RefreshTokenUseCase = Depends(get_refresh_token_use_case),
) -> AuthTokenRes:
    result = await use_case.execute(RefreshTokenInput(refresh_token=req.refresh_token))
    if result.error is not None:
        raise_auth_error(result.error)
    return AuthTokenRes.from_tokens(result.tokens)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    claims: AccessTokenClaims = Depends(current_claims),
    use_case: LogoutUseCase = Depends(get_logout_use_case),
) -> Response:
    result = await use_case.execute(claims.subject)
    if result.error is not None:
        raise_auth_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
