"""Rutas de autenticación: registro, login y perfil básico."""
from fastapi import APIRouter, Depends, Request, status

from memo_board.api.deps import get_current_user
from memo_board.api.schemas.auth import (
    ErrorOut,
    LoginOut,
    LoginPayload,
    RegisterOut,
    RegisterPayload,
    UserSummary,
)
from memo_board.core import rate_limit
from memo_board.core.config import settings
from memo_board.core.exceptions import TooManyAttempts
from memo_board.services import auth_service as service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=RegisterOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorOut}},
    summary="Registrar usuario",
    description="Crea un usuario local con contraseña hasheada (argon2).",
)
def register(payload: RegisterPayload) -> RegisterOut:
    user = service.register_user(username=payload.username, email=payload.email, password=payload.password)
    return RegisterOut(message="User registered successfully", user=user)


@router.post(
    "/login",
    response_model=LoginOut,
    responses={401: {"model": ErrorOut}, 404: {"model": ErrorOut}, 429: {"model": ErrorOut}},
    summary="Login local",
    description="Verifica email+password y emite un bearer token firmado (7 días).",
)
def login(payload: LoginPayload, request: Request) -> LoginOut:
    # Rate limit por IP
    ip = request.client.host if request.client else ""
    if not rate_limit.allow((ip, "/auth/login"), limit=settings.login_rate_per_min, window_seconds=60):
        raise TooManyAttempts()
    token = service.login_local(email=payload.email, password=payload.password)
    return LoginOut(message="Login successful", token=token)


@router.get(
    "/me",
    response_model=UserSummary,
    responses={401: {"model": ErrorOut}},
    summary="Perfil básico del usuario",
    description="Devuelve información básica del usuario autenticado.",
)
def me(user=Depends(get_current_user)) -> UserSummary:
    return service.to_summary(user)
