from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from organizations.app.repositories.organization_repository import IOrganizationRepository
from organizations.domain.entities import Invitation, Membership, Organization
from organizations.domain.entities.organization import SLUG_INDEX
from organizations.domain.roles import OWNER

from .integrity import flush

CONSTRAINTS = ((SLUG_INDEX, ("organizations.slug", "slug")),)


class OrganizationRepository(IOrganizationRepository):
    """Organization repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, organization_id: UUID) -> Optional[Organization]:
        """Get organization by ID"""
        stmt = select(Organization).where(Organization.id == organization_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Organization]:
        """Get organization by slug (case-insensitive)"""
        stmt = select(Organization).where(
            func.lower(Organization.slug) == slug.strip().lower()
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        """Check whether a slug is already taken"""
        stmt = (
            select(Organization.id)
            .where(func.lower(Organization.slug) == slug.strip().lower())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_by_member(self, user_id: UUID) -> List[Organization]:
        """Get all organizations the user belongs to"""
        stmt = (
            select(Organization)
            .join(Membership, Membership.organization_id == Organization.id)
            .where(Membership.user_id == user_id)
            .order_by(Organization.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_owned_by(self, user_id: UUID) -> int:
        """Count organizations where the user holds the owner membership"""
        stmt = (
            select(func.count())
            .select_from(Membership)
            .where(Membership.user_id == user_id, Membership.role == OWNER)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def create(self, organization: Organization) -> Organization:
        """Create a new organization"""
        organization.slug = organization.slug.lower()
        self.session.add(organization)
        await flush(self.session, CONSTRAINTS)
        await self.session.refresh(organization)
        return organization

    async def update(self, organization: Organization) -> Organization:
        """Update existing organization"""
        self.session.add(organization)
        await flush(self.session, CONSTRAINTS)
        await self.session.refresh(organization)
        return organization

    async def delete(self, organization: Organization) -> None:
        """Delete an organization with its memberships and invitations"""
        await self.session.execute(
            delete(Invitation).where(Invitation.organization_id == organization.id)
        )
        await self.session.execute(
            delete(Membership).where(Membership.organization_id == organization.id)
        )
        await self.session.delete(organization)
        await self.session.flush()
