from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from organizations.domain.entities import Membership


class IMembershipRepository(ABC):
    """Membership repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_organization(
        self, user_id: UUID, organization_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and organization"""
        pass

    @abstractmethod
    async def get_owner(self, organization_id: UUID) -> Optional[Membership]:
        """Get the owner membership of an organization"""
        pass

    @abstractmethod
    async def get_by_organization_id(self, organization_id: UUID) -> List[Membership]:
        """Get all memberships for an organization"""
        pass

    @abstractmethod
    async def get_member_by_email(
        self, organization_id: UUID, email: str
    ) -> Optional[Membership]:
        """Get the membership of the user registered with this email"""
        pass

    @abstractmethod
    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        pass

    @abstractmethod
    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        pass

    @abstractmethod
    async def delete(self, membership: Membership) -> None:
        """Delete a membership"""
        pass
