"""Auth routes: signup, login, logout, me. Session token lives in an HTTP-only cookie."""
from __future__ import annotations

from fastapi import APIRouter, Response, status

from anecdotes.dependencies import Credentials, CurrentUser
from anecdotes.schemas.auth import (
    LoginOutSchema,
    LoginSchema,
    MeOutSchema,
    SignupOutSchema,
    SignupSchema,
    UserOutSchema,
    UserSummarySchema,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=SignupOutSchema, status_code=status.HTTP_201_CREATED)
async def signup(body: SignupSchema, credentials: Credentials):
    """Create a user; returns id and username only."""
    user = await credentials.register(body.username, body.password, body.email)
    return SignupOutSchema(
        message="User created successfully",
        user=UserSummarySchema(id=user.id, username=user.username),
    )


@router.post("/login", response_model=LoginOutSchema)
async def login(body: LoginSchema, response: Response, credentials: Credentials):
    """Authenticate and set the session cookie. The token is never in the body."""
    user, token = await credentials.authenticate(body.username, body.password)
    response.set_cookie(value=token, **credentials.cookie_settings())
    return LoginOutSchema(ok=True, user=UserOutSchema.model_validate(user))


@router.post("/logout")
async def logout(response: Response, credentials: Credentials):
    """Clear the session cookie."""
    revoke = credentials.revoke()
    # path and attributes must match what set_cookie() used
    response.delete_cookie(
        revoke.cookie_name,
        path=revoke.path,
        httponly=revoke.httponly,
        samesite=revoke.samesite,
        secure=revoke.secure,
    )
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeOutSchema)
async def me(current_user: CurrentUser):
    return MeOutSchema(user=UserOutSchema.model_validate(current_user))
