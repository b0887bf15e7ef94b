# app/api/auth/main.py
"""
Login for the admin panel.

Accepts a JSON body {email, password} (validated like every other payload),
checks it through fastapi-users and returns the user plus a JWT access token.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm

from ...core.config import get_settings
from ...core.exceptions import AuthError
from ...core.rate_limit import limiter
from ...core.users import UserManager, current_active_user, get_jwt_strategy, get_user_manager
from ...models.user import User
from ...schemas.user import LoginRequest, LoginResponse, LoginUser, TokenPair, UserRead

router = APIRouter()
settings = get_settings()


@router.post("/auth/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
async def api_login(
    request: Request,
    credentials: LoginRequest,
    user_manager: UserManager = Depends(get_user_manager),
):
    form = OAuth2PasswordRequestForm(username=credentials.email, password=credentials.password)
    user = await user_manager.authenticate(form)
    if user is None or not user.is_active:
        raise AuthError("Credenciais inválidas")

    token = await get_jwt_strategy().write_token(user)
    await user_manager.on_after_login(user, request)

    return LoginResponse(
        user=LoginUser(id=user.id, email=user.email, name=user.name, role=user.role),
        tokens=TokenPair(
            access_token=token,
            expires_in=settings.access_token_lifetime_seconds,
        ),
    )


@router.get("/auth/me", response_model=UserRead)
async def api_me(user: User = Depends(current_active_user)):
    return user
