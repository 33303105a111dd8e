"""
Use Case Base

Transaction, race-retry and event plumbing shared by every organization
use case.
"""

import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, List, Optional, Tuple, TypeVar

from organizations.app.services.authorization import Authorization
from organizations.app.services.callbacks import CallbackDispatcher, callback_dispatcher
from organizations.app.services.clock import Clock, SystemClock
from organizations.app.services.settings import OrganizationSettings
from organizations.app.services.slugs import SlugGenerator
from organizations.app.services.token_issuer import TokenIssuer
from organizations.app.services.unit_of_work import UnitOfWork
from organizations.domain.callback_context import CallbackContext
from organizations.domain.entities import CallbackEvent, Organization, User
from organizations.domain.errors import (
    InvalidOrganizationName,
    OrganizationNotFound,
    UniqueViolation,
    UserNotFound,
)
from organizations.domain.roles import RoleHierarchy, get_role_hierarchy

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_RACE_ATTEMPTS = 3


class OrganizationUseCase:
    """
    Base class for organization use cases.

    Business Rules:
    - One unit of work per attempt; nothing is visible until commit
    - A UniqueViolation means a concurrent writer won: roll back and
      re-run the whole operation, which re-derives the idempotent result
    - Events queued by the operation are dispatched only after commit,
      and only for the attempt that committed
    """

    def __init__(
        self,
        uow: UnitOfWork,
        roles: Optional[RoleHierarchy] = None,
        clock: Optional[Clock] = None,
        callbacks: Optional[CallbackDispatcher] = None,
        settings: Optional[OrganizationSettings] = None,
        token_issuer: Optional[TokenIssuer] = None,
        slugs: Optional[SlugGenerator] = None,
        max_attempts: int = MAX_RACE_ATTEMPTS,
    ):
        self.uow = uow
        self.roles = roles if roles is not None else get_role_hierarchy()
        self.clock = clock if clock is not None else SystemClock()
        self.callbacks = callbacks if callbacks is not None else callback_dispatcher
        self.settings = settings if settings is not None else OrganizationSettings()
        self.token_issuer = token_issuer if token_issuer is not None else TokenIssuer()
        self.slugs = slugs if slugs is not None else SlugGenerator()
        self.max_attempts = max_attempts
        self.authorization = Authorization(uow, self.roles)
        self._events: List[Tuple[CallbackEvent, CallbackContext]] = []

    def _emit(self, event: CallbackEvent, **fields: Any) -> None:
        """Queue an event for dispatch once the transaction commits"""
        self._events.append((event, CallbackContext(event=event, **fields)))

    async def _run(self, operation: Callable[..., Awaitable[T]], *args: Any) -> T:
        attempt = 1
        while True:
            self._events = []
            try:
                async with self.uow:
                    result = await operation(*args)
                    await self.uow.commit()
            except UniqueViolation as exc:
                if attempt >= self.max_attempts:
                    logger.warning(
                        f"{type(self).__name__} gave up after {attempt} attempts "
                        f"on {exc.constraint}"
                    )
                    raise
                logger.warning(
                    f"{type(self).__name__} lost a race on {exc.constraint} "
                    f"(attempt {attempt}), retrying"
                )
                attempt += 1
                continue

            events, self._events = self._events, []
            for event, context in events:
                await self.callbacks.dispatch(event, context)
            return result

    def _expires_at(self, now: datetime) -> Optional[datetime]:
        expiry = self.settings.invitation_expiry
        return None if expiry is None else now + expiry

    async def _get_organization(self, organization_id) -> Organization:
        organization = await self.uow.organizations.get_by_id(organization_id)
        if organization is None:
            raise OrganizationNotFound()
        return organization

    async def _get_user(self, user_id) -> User:
        user = await self.uow.users.get_by_id(user_id)
        if user is None:
            raise UserNotFound()
        return user


def clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise InvalidOrganizationName()
    return name
