from typing import Callable, Type, TypeVar
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig, configure_logging
from organizations.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from organizations.api.utils.jwt import verify_jwt
from organizations.app.services.settings import OrganizationSettings
from organizations.app.use_cases.base import OrganizationUseCase
from organizations.domain.roles import build_role_hierarchy, configure_role_hierarchy

U = TypeVar("U", bound=OrganizationUseCase)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

settings = OrganizationSettings.from_config(ApplicationConfig)


def bootstrap(config=ApplicationConfig) -> OrganizationSettings:
    """
    Process startup: logging, settings and the frozen role hierarchy.

    Call once before serving requests.
    """
    global settings
    configure_logging(config.LOG_LEVEL)
    configured = OrganizationSettings.from_config(config)
    hierarchy = build_role_hierarchy(configured.custom_roles)
    configured.check_roles(hierarchy)
    settings = configured
    configure_role_hierarchy(hierarchy)
    return settings


def get_settings() -> OrganizationSettings:
    return settings


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> UUID:
    """
    Dependency resolving the acting user from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        The user_id claim as a UUID

    Raises:
        HTTPException: 401 if token is invalid, expired or carries no user
    """
    payload = verify_jwt(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    try:
        return UUID(str(payload["user_id"]))
    except (KeyError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token does not identify a user",
        )


def use_case(use_case_class: Type[U]) -> Callable[..., U]:
    """Dependency factory: a use case bound to a request-scoped unit of work"""

    def dependency(
        uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
        settings: OrganizationSettings = Depends(get_settings),
    ) -> U:
        return use_case_class(uow, settings=settings)

    return dependency
