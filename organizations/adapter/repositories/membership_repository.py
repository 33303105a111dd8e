from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from organizations.app.repositories.membership_repository import IMembershipRepository
from organizations.domain.entities import Membership, User, normalize_email
from organizations.domain.entities.membership import (
    MEMBERSHIP_USER_INDEX,
    SINGLE_OWNER_INDEX,
)
from organizations.domain.roles import OWNER

from .integrity import flush

# user_id first: the PostgreSQL name of the owner index carries no column
CONSTRAINTS = (
    (MEMBERSHIP_USER_INDEX, ("user_id",)),
    (SINGLE_OWNER_INDEX, ("single_owner", "memberships.organization_id")),
)


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_organization(
        self, user_id: UUID, organization_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and organization"""
        stmt = select(Membership).where(
            Membership.user_id == user_id,
            Membership.organization_id == organization_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_owner(self, organization_id: UUID) -> Optional[Membership]:
        """Get the owner membership of an organization"""
        stmt = select(Membership).where(
            Membership.organization_id == organization_id, Membership.role == OWNER
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_organization_id(self, organization_id: UUID) -> List[Membership]:
        """Get all memberships for an organization"""
        stmt = (
            select(Membership)
            .where(Membership.organization_id == organization_id)
            .order_by(Membership.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_member_by_email(
        self, organization_id: UUID, email: str
    ) -> Optional[Membership]:
        """Get the membership of the user registered with this email"""
        stmt = (
            select(Membership)
            .join(User, User.id == Membership.user_id)
            .where(
                Membership.organization_id == organization_id,
                func.lower(User.email) == normalize_email(email),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        self.session.add(membership)
        await flush(self.session, CONSTRAINTS)
        await self.session.refresh(membership)
        return membership

    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        self.session.add(membership)
        await flush(self.session, CONSTRAINTS)
        await self.session.refresh(membership)
        return membership

    async def delete(self, membership: Membership) -> None:
        """Delete a membership"""
        await self.session.delete(membership)
        await self.session.flush()
