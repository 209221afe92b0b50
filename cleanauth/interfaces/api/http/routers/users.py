"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    Users Router

Responsibilities:
    - GET /users/{id} (cache-aside), POST /users (alta pública),
      PATCH /users/{id}, POST /users/{id}/deactivate.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir UserError -> HTTP (error_mapping).

Collaborators:
    - application.usecases (users)
    - cleanauth.container (factories DI)
    - schemas.users (DTOs)

Patterns:
    - Controller / Router
    - Adapter (HTTP -> UseCase)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from .....application.usecases import (
    CreateUserInput,
    CreateUserUseCase,
    DeactivateUserInput,
    DeactivateUserUseCase,
    GetUserByIdUseCase,
    UpdateUserProfileInput,
    UpdateUserProfileUseCase,
)
from .....container import (
    get_create_user_use_case,
    get_deactivate_user_use_case,
    get_get_user_use_case,
    get_update_user_profile_use_case,
)
from .....domain.entities import AccessTokenClaims
from ..dependencies import current_claims, to_user_actor
from ..error_mapping import raise_user_error
from ..schemas.users import CreateUserReq, UpdateUserProfileReq, UserRes

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserRes)
async def get_user(
    user_id: UUID,
    _claims: AccessTokenClaims = Depends(current_claims),
    use_case: GetUserByIdUseCase = Depends(get_get_user_use_case),
) -> UserRes:
    result = await use_case.execute(user_id)
    if result.error is not None:
        raise_user_error(result.error)
    return UserRes.from_model(result.user)


@router.post("", response_model=UserRes, status_code=status.HTTP_201_CREATED)
async def create_user(
    req: CreateUserReq,
    request: Request,
    response: Response,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
) -> UserRes:
    result = await use_case.execute(
        CreateUserInput(
            email=req.email,
            first_name=req.first_name,
            last_name=req.last_name,
            password=req.password,
        )
    )
    if result.error is not None:
        raise_user_error(result.error)

    response.headers["Location"] = str(
        request.url_for("get_user", user_id=str(result.user.id))
    )
    return UserRes.from_model(result.user)


@router.patch("/{user_id}", response_model=UserRes)
async def update_user_profile(
    user_id: UUID,
    req: UpdateUserProfileReq,
    claims: AccessTokenClaims = Depends(current_claims),
    use_case: UpdateUserProfileUseCase = Depends(get_update_user_profile_use_case),
) -> UserRes:
    result = await use_case.execute(
        UpdateUserProfileInput(
            user_id=user_id,
            first_name=req.first_name,
            last_name=req.last_name,
            actor=to_user_actor(claims),
        )
    )
    if result.error is not None:
        raise_user_error(result.error)
    return UserRes.from_model(result.user)


@router.post("/{user_id}/deactivate", response_model=UserRes)
async def deactivate_user(
    user_id: UUID,
    claims: AccessTokenClaims = Depends(current_claims),
    use_case: DeactivateUserUseCase = Depends(get_deactivate_user_use_case),
) -> UserRes:
    result = await use_case.execute(
        DeactivateUserInput(user_id=user_id, actor=to_user_actor(claims))
    )
    if result.error is not None:
        raise_user_error(result.error)
    return UserRes.from_model(result.user)
