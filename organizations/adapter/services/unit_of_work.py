from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from organizations.adapter.repositories import (
    invitation_repository,
    membership_repository,
    organization_repository,
    user_repository,
)
from organizations.adapter.repositories.integrity import to_unique_violation
from organizations.adapter.repositories.invitation_repository import InvitationRepository
from organizations.adapter.repositories.membership_repository import MembershipRepository
from organizations.adapter.repositories.organization_repository import OrganizationRepository
from organizations.adapter.repositories.user_repository import UserRepository
from organizations.app.services.unit_of_work import UnitOfWork

# Most specific markers first
ALL_CONSTRAINTS = (
    user_repository.CONSTRAINTS
    + organization_repository.CONSTRAINTS
    + membership_repository.CONSTRAINTS
    + invitation_repository.CONSTRAINTS
)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.organizations = OrganizationRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        try:
            await self.session.commit()
        except IntegrityError as exc:
            violation = to_unique_violation(exc, ALL_CONSTRAINTS)
            if violation is None:
                raise
            raise violation from exc

    async def rollback(self):
        await self.session.rollback()
