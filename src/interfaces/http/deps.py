from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request

from src.application.services.governance import GovernanceFacade
from src.config.settings import Settings
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.crypto.signer import JWSSigner
from src.infrastructure.db.session import SQLAlchemyUnitOfWork


async def get_auth_context(request: Request) -> AuthContext:
    context = getattr(request.state, "auth_context", None)
    return context if context is not None else AuthContext.anonymous()


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise RuntimeError("Settings not configured")
    return settings


def get_signer(request: Request) -> JWSSigner:
    signer = getattr(request.app.state, "signer", None)
    if signer is None:
        raise RuntimeError("Signer not configured")
    return signer


async def get_facade(
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
    signer: JWSSigner = Depends(get_signer),
) -> GovernanceFacade:
    return GovernanceFacade(
        uow,
        context,
        admin_account=settings.admin_account,
        minting_policy=settings.minting_policy,
        profile_policy=settings.profile_policy,
        signer=signer,
    )
