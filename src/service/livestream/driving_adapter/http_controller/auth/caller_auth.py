from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.service.livestream.domain.value_object.caller_identity import CallerIdentity
from src.service.livestream.driving_adapter.http_controller.auth.session_auth import SessionAuth


@inject
async def get_caller_identity(
    session_auth: SessionAuth = Depends(Provide[Container.session_auth]),
    token: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
) -> CallerIdentity:
    """Verify the session cookie (stateless, no DB query)"""
    return session_auth.get_caller_identity(token)
