from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from organizations.app.repositories.user_repository import IUserRepository
from organizations.domain.entities import Invitation, Membership, User, normalize_email

from .integrity import flush

EMAIL_INDEX = "ix_users_email"

CONSTRAINTS = ((EMAIL_INDEX, ("users.email",)),)


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)"""
        stmt = select(User).where(func.lower(User.email) == normalize_email(email))
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await flush(self.session, CONSTRAINTS)
        await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """Delete a user, their memberships and every invited_by reference"""
        await self.session.execute(
            update(Invitation)
            .where(Invitation.invited_by_id == user.id)
            .values(invited_by_id=None)
        )
        await self.session.execute(
            update(Membership)
            .where(Membership.invited_by_id == user.id)
            .values(invited_by_id=None)
        )
        await self.session.execute(delete(Membership).where(Membership.user_id == user.id))
        await self.session.delete(user)
        await self.session.flush()
