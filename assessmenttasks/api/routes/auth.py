"""Authentication routes - register and login."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from assessmenttasks.api.deps import Caller, get_db_session, require_access
from assessmenttasks.api.errors import ApiError, persistence_failure
from assessmenttasks.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from assessmenttasks.domain.services.auth_service import AuthService, InvalidCredentialsError
from assessmenttasks.domain.services.errors import PersistenceError

router = APIRouter(tags=["authentication"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
)
async def register(
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db_session),
    _: Caller = Depends(require_access("POST", "/register")),
) -> RegisterResponse:
    service = AuthService(session)

    try:
        user_id = await service.register_user(
            username=payload.username,
            password=payload.password,
            email=payload.email,
        )
    except PersistenceError as exc:
        raise persistence_failure("Error registering user") from exc

    return RegisterResponse(message="User registered successfully", userId=user_id)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="User login",
    description="Authenticate with email and password, returns a bearer token.",
)
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
    _: Caller = Depends(require_access("POST", "/login")),
) -> LoginResponse:
    service = AuthService(session)

    try:
        token = await service.login(email=payload.email, password=payload.password)
    except InvalidCredentialsError as exc:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, str(exc)) from exc
    except PersistenceError as exc:
        raise persistence_failure("Error logging in") from exc

    return LoginResponse(message="Login successful", token=token)
