"""FastAPI dependencies: settings, stores, services and the current user."""
from typing import Annotated

from fastapi import Depends, Request
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from anecdotes.core.config import Settings
from anecdotes.core.exceptions import TokenError
from anecdotes.db.session import get_db
from anecdotes.services.auth import CredentialManager, UserIdentity
from anecdotes.services.posts import PostAuthorizer, PostService
from anecdotes.stores.posts import PostStore
from anecdotes.stores.users import UserStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
DBSession = Annotated[AsyncSession, Depends(get_db)]


def get_credential_manager(db: DBSession, settings: SettingsDep) -> CredentialManager:
    return CredentialManager(UserStore(db), settings)


def get_post_authorizer(request: Request) -> PostAuthorizer:
    return request.app.state.post_authorizer


def get_post_service(
    db: DBSession,
    authorizer: Annotated[PostAuthorizer, Depends(get_post_authorizer)],
) -> PostService:
    return PostService(PostStore(db), authorizer)


Credentials = Annotated[CredentialManager, Depends(get_credential_manager)]
Posts = Annotated[PostService, Depends(get_post_service)]


async def get_current_user(
    request: Request,
    credentials: Credentials,
    settings: SettingsDep,
) -> UserIdentity:
    """Resolve the session cookie to a live user or raise a 401 error."""
    token = request.cookies.get(settings.auth_cookie_name)
    try:
        return await credentials.verify(token)
    except TokenError as exc:
        logger.info("Rejected session on {} {}: {}", request.method, request.url.path, exc.message)
        raise


CurrentUser = Annotated[UserIdentity, Depends(get_current_user)]
