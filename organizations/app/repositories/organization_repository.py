from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from organizations.domain.entities import Organization


class IOrganizationRepository(ABC):
    """Organization repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, organization_id: UUID) -> Optional[Organization]:
        """Get organization by ID"""
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Organization]:
        """Get organization by slug (case-insensitive)"""
        pass

    @abstractmethod
    async def slug_exists(self, slug: str) -> bool:
        """Check whether a slug is already taken"""
        pass

    @abstractmethod
    async def get_by_member(self, user_id: UUID) -> List[Organization]:
        """Get all organizations the user belongs to"""
        pass

    @abstractmethod
    async def count_owned_by(self, user_id: UUID) -> int:
        """Count organizations where the user holds the owner membership"""
        pass

    @abstractmethod
    async def create(self, organization: Organization) -> Organization:
        """Create a new organization"""
        pass

    @abstractmethod
    async def update(self, organization: Organization) -> Organization:
        """Update existing organization"""
        pass

    @abstractmethod
    async def delete(self, organization: Organization) -> None:
        """Delete an organization with its memberships and invitations"""
        pass
