from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from organizations.app.repositories.invitation_repository import IInvitationRepository
from organizations.domain.entities import Invitation, normalize_email
from organizations.domain.entities.invitation import OPEN_INVITATION_INDEX, TOKEN_INDEX

from .integrity import flush

CONSTRAINTS = (
    (TOKEN_INDEX, ("token",)),
    (OPEN_INVITATION_INDEX, ("open_email", "email")),
)


def _pending(now: datetime):
    return (
        Invitation.accepted_at.is_(None),
        or_(Invitation.expires_at.is_(None), Invitation.expires_at > now),
    )


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _one(self, stmt, for_update: bool) -> Optional[Invitation]:
        if for_update:
            # Re-read the locked row instead of trusting the identity map
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(
        self, invitation_id: UUID, for_update: bool = False
    ) -> Optional[Invitation]:
        """Get invitation by ID, optionally locking the row"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        return await self._one(stmt, for_update)

    async def get_by_token(
        self, token: str, for_update: bool = False
    ) -> Optional[Invitation]:
        """Get invitation by token, optionally locking the row"""
        stmt = select(Invitation).where(Invitation.token == token)
        return await self._one(stmt, for_update)

    async def token_exists(self, token: str) -> bool:
        """Check whether a token is already in use"""
        stmt = select(Invitation.id).where(Invitation.token == token).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_open_by_organization_and_email(
        self, organization_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get the non-accepted (pending or expired) invitation for an email"""
        stmt = select(Invitation).where(
            Invitation.organization_id == organization_id,
            Invitation.email == normalize_email(email),
            Invitation.accepted_at.is_(None),
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_pending_by_organization_id(
        self, organization_id: UUID, now: datetime
    ) -> List[Invitation]:
        """Get invitations that are neither accepted nor expired"""
        stmt = (
            select(Invitation)
            .where(Invitation.organization_id == organization_id, *_pending(now))
            .order_by(Invitation.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_pending_by_email(self, email: str, now: datetime) -> List[Invitation]:
        """Get pending invitations addressed to an email across organizations"""
        stmt = (
            select(Invitation)
            .where(Invitation.email == normalize_email(email), *_pending(now))
            .order_by(Invitation.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        invitation.email = normalize_email(invitation.email)
        self.session.add(invitation)
        await flush(self.session, CONSTRAINTS)
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await flush(self.session, CONSTRAINTS)
        await self.session.refresh(invitation)
        return invitation

    async def delete(self, invitation: Invitation) -> None:
        """Delete an invitation"""
        await self.session.delete(invitation)
        await self.session.flush()
